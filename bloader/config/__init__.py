"""Validation of the load-testing tool's configuration and nested-key access."""