"""
Proxy discovery

Asks Git for Windows' ``proxy-lookup`` helper (which consults the system
WinHTTP/WPAD configuration) which proxy to use for a URL. Falls back to
the proxies advertised through the environment or registry.
"""

import logging
import shutil
import subprocess
import urllib.request
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def lookup_with_helper(helper: str, url: str) -> str | None:
    """
    Run the proxy-lookup helper for a URL

    Args:
        helper: Helper executable name or path
        url: URL the proxy is needed for

    Returns:
        str or None: Proxy URL, or None if the helper is missing or reports none
    """
    helper_path = shutil.which(helper)
    if not helper_path:
        logger.debug(f"Proxy lookup helper not found: {helper}")
        return None

    try:
        result = subprocess.run(
            [helper_path, url],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"Proxy lookup helper failed: {e}")
        return None

    proxy = result.stdout.strip()
    if result.returncode != 0 or not proxy:
        logger.debug(f"Proxy lookup helper found no proxy (returncode={result.returncode})")
        return None
    return proxy


def lookup_from_system(url: str) -> str | None:
    """Return the system proxy configured for the URL's scheme, if any"""
    scheme = urlsplit(url).scheme or "https"
    return urllib.request.getproxies().get(scheme)


def discover_proxy(url: str, helper: str = "proxy-lookup.exe") -> str | None:
    """
    Discover the proxy to use for a URL

    Args:
        url: URL that could not be reached directly
        helper: proxy-lookup helper executable

    Returns:
        str or None: Proxy URL if one was found
    """
    proxy = lookup_with_helper(helper, url) or lookup_from_system(url)
    if proxy:
        logger.info(f"Discovered proxy for {url}: {proxy}")
    else:
        logger.info(f"No proxy found for {url}")
    return proxy
