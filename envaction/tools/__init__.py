# envaction/tools package
# Command-line entry points run by the action.
