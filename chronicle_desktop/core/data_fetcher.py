import logging
from datetime import datetime

from .stats import submission_stats

logger = logging.getLogger(__name__)


# --- Data Fetching Functions (for Worker threads) --- #
def fetch_section_data(source, section, force_refresh=False):
    """
    Fetch one admin section.

    Args:
        source: Section source exposing ``fetch_section(name)``
        section: Section name, e.g. 'blog_posts'
        force_refresh: Set by refresh requests; only logged, the source never caches

    Returns:
        dict: {'data': DataFrame, 'refreshed_at': datetime}
    """
    logger.info(f"Fetching section data for {section} (force_refresh={force_refresh})")
    df = source.fetch_section(section)
    return {"data": df, "refreshed_at": datetime.now()}


def fetch_all_sections(source):
    """
    Fetch every section in one pass, for the initial load.

    A failing section does not abort the others: its entry carries
    {'error': message} instead of data.

    Returns:
        dict: section name -> result dict as returned by the per-section fetchers
    """
    results = {}
    for section, fetch_func, args in (
        ("blog_posts", fetch_section_data, ("blog_posts",)),
        ("cities", fetch_section_data, ("cities",)),
        ("contact_submissions", fetch_submissions_data, ()),
    ):
        try:
            results[section] = fetch_func(source, *args)
        except Exception as e:
            logger.warning(f"Failed to fetch section {section}: {e}", exc_info=True)
            results[section] = {"error": str(e), "refreshed_at": datetime.now()}
    return results


def fetch_submissions_data(source, force_refresh=False):
    """
    Fetch contact submissions together with their summary statistics.

    Returns:
        dict: {'data': {'rows': DataFrame, 'stats': dict}, 'refreshed_at': datetime}
    """
    logger.info(f"Fetching submissions data (force_refresh={force_refresh})")
    df = source.fetch_section("contact_submissions")
    stats = submission_stats(df)
    logger.debug(f"Submission stats: {stats}")
    return {"data": {"rows": df, "stats": stats}, "refreshed_at": datetime.now()}
