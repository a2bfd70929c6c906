# Module for executing parse/attach tasks against the mirror tree
import logging

import constants
from file_handler import write_page, copy_asset
from html_processor import compose_page_document, find_assets
from tasks import AttachTask, ParseTask, TaskResult

logger = logging.getLogger(__name__)


def _mirror_root(config):
    return config.get('mirror_root', constants.DEFAULT_MIRROR_ROOT)


def execute_parse_task(task, config):
    """
    Saves a rendered page at its mirror path and returns the in-scope assets
    it references. The composed document is what gets both saved and scanned.
    """
    html_content = compose_page_document(task.head, task.body)
    write_page(html_content, task.url, _mirror_root(config))
    assets = find_assets(html_content, task.url, config)
    logger.info(f"Parsed {task.url}: {len(assets)} assets to fetch")
    return TaskResult(assets=assets, page_url=task.url)


def execute_attach_task(task, config):
    """Copies a downloaded asset under '<page dir>/assets/'. Never yields new assets."""
    copy_asset(task.file_path, task.url, task.page_url, _mirror_root(config))
    logger.info(f"Attached {task.url} to {task.page_url}")
    return TaskResult(assets=[], page_url=task.page_url)


def execute_task(task, config):
    """
    Executes one task.

    Returns:
        TaskResult: assets to fetch next and the page URL they belong to.

    Raises:
        TaskExecutionError: a PathExtractionError, DirectoryCreationError,
        FileWriteError or FileCopyError describing the failed step. Files and
        directories created before the failure are left in place.
    """
    if isinstance(task, ParseTask):
        return execute_parse_task(task, config)
    if isinstance(task, AttachTask):
        return execute_attach_task(task, config)
    raise TypeError(f"Unsupported task type: {type(task).__name__}")
