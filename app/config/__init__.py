# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains all Django configuration: settings (production and
# test), URLs, and ASGI/WSGI applications.
# =============================================================================
