"""
Version information for the WSF client library.

Centralized version management, default user agent and the default
WSF API endpoint used by the client configuration.
"""

# Core library information
__version__ = "0.1.0"
__version_info__ = (0, 1, 0)
__app_name__ = "wsf-client"
__app_display_name__ = "WSF Client - Washington State Ferries API"
__description__ = "Client library for the Washington State Ferries vessel location feed"
__license__ = "MIT"

# API information
__api_provider__ = "Washington State Ferries"
__api_documentation_url__ = (
    "http://www.wsdot.wa.gov/ferries/api/vessels/documentation/rest.html"
)
__default_base_url__ = "http://www.wsdot.wa.gov/ferries/api/"
__default_user_agent__ = f"{__app_name__}/{__version__}"

__python_version_required__ = "3.9+"


def get_version_string() -> str:
    """Get formatted version string."""
    return f"{__app_name__} v{__version__}"


def get_api_info() -> dict:
    """Get upstream API information."""
    return {
        "version": __version__,
        "provider": __api_provider__,
        "base_url": __default_base_url__,
        "documentation": __api_documentation_url__,
        "user_agent": __default_user_agent__,
        "api_key_required": True,
    }
