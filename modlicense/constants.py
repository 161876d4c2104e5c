"""Constants for modlicense."""

# Exit codes
EXIT_SUCCESS = 0  # No violations found
EXIT_ISSUES = 1  # Disallowed licenses found
EXIT_ERROR = 2  # Run failed due to error

DEFAULT_SCANNER = "go-licenses"
DEFAULT_DESCRIPTOR = "go.mod"
DEFAULT_REPORT_PATH = "docs/_licenses.md"

# Upper bound on scanner processes running at once
MAX_CONCURRENT_SCANS = 10

LICENSE_CATEGORIES = ("forbidden", "notice", "reciprocal", "restricted", "unknown")
DEFAULT_DISALLOWED_TYPES = ("forbidden", "restricted")

# Substrings the scanner writes to stderr for each disallowed package
VIOLATION_MARKERS = (
    "Reciprocal license type",
    "Forbidden license type",
    "Notice license type",
    "Restricted license type",
)

# Go text/template rendered by the scanner in report mode
REPORT_TEMPLATE = """---
hub-title: Licenses
---

The following tools / packages are used in this plugin:

| Name | License |
|------|---------|
{{- range . }}
{{- if ne .LicenseName "Unknown" }}
| {{ .Name }} | {{ .LicenseName }} |
{{- end }}
{{- end }}"""
