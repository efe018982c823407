# envaction package
# Client side of the CI runner's workflow-command protocol, plus the
# key normalization and conflict handling used by the set-env-vars action.
