# envaction/config package
# Runtime defaults loaded from runtime.yaml with environment overrides.
