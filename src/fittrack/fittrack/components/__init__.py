# ABOUTME: Components package
# ABOUTME: Composes interfaces and implementations into document and request-guard services
