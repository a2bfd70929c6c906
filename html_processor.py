# Module for HTML composition, asset scope filtering and asset discovery

import logging
import re

# Set up a specific logger for this module
logger = logging.getLogger(__name__)

from bs4 import BeautifulSoup
import constants # Import constants

_PAGE_URL_RES = [re.compile(pattern) for pattern in constants.PAGE_URL_PATTERNS]


# --- Page Composition ---
def compose_page_document(head, body):
    """Wraps head and body markup fragments into a full HTML document."""
    return (
        "<html>\n"
        f"\n<head>\n{head}\n</head>\n"
        f"\n<body>\n{body}\n</body>\n"
        "\n</html>"
    )


# --- Asset Scope ---
def is_asset_in_scope(url, config):
    """
    Decides whether a referenced URL is an asset of the mirrored site family.
    Pages (.html, /pages/..., /blog/...) and the excluded URLs are handled by
    page tasks, never as assets.
    """
    if url.endswith(constants.PAGE_SUFFIX):
        return False
    if any(page_re.match(url) for page_re in _PAGE_URL_RES):
        return False
    if url in config.get('excluded_urls', constants.DEFAULT_EXCLUDED_URLS):
        return False
    substrings = config.get('asset_host_substrings', constants.DEFAULT_ASSET_HOST_SUBSTRINGS)
    return any(substring in url for substring in substrings)


# --- Asset Discovery ---
def _collect(soup, tag_names, attr, page_url, config, found_assets):
    for tag_name in tag_names:
        for tag in soup.find_all(tag_name):
            url = tag.get(attr)
            if not url or url in found_assets or url == page_url:
                continue
            # PDFs embedded in an iframe are linked content, not fetchable assets
            if tag_name == 'iframe' and url.endswith(constants.PDF_SUFFIX):
                continue
            if is_asset_in_scope(url, config):
                found_assets.append(url)


def find_assets(html_content, page_url, config):
    """
    Finds in-scope asset URLs referenced by the markup.

    Returns:
        list: URLs in first-seen order, without duplicates. `a`/`link` hrefs
        come first, then `img`/`iframe`/`audio`/`source` srcs; each tag's
        elements are taken in document order.
    """
    found_assets = []
    if not html_content:
        return found_assets

    soup = BeautifulSoup(html_content, 'html.parser')
    _collect(soup, constants.HREF_TAGS, 'href', page_url, config, found_assets)
    _collect(soup, constants.SRC_TAGS, 'src', page_url, config, found_assets)

    logger.debug(f"Found {len(found_assets)} assets to fetch for {page_url}")
    return found_assets
