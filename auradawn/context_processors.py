from .models import SiteConfig


def site_settings(request):
    """Expose the editable site settings to templates as ``site``."""
    return {"site": SiteConfig.get_settings()}
