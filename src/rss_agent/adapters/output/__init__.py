"""Output formatting adapters."""

from rss_agent.adapters.output.formatters import (
    analysis_result_to_dict,
    feed_info_to_dict,
    feed_to_dict,
    format_batch_pretty,
    format_feed_pretty,
    format_validation_pretty,
    item_to_dict,
    media_to_dict,
    validation_result_to_dict,
    validation_summary_to_dict,
)

__all__ = [
    "analysis_result_to_dict",
    "feed_info_to_dict",
    "feed_to_dict",
    "format_batch_pretty",
    "format_feed_pretty",
    "format_validation_pretty",
    "item_to_dict",
    "media_to_dict",
    "validation_result_to_dict",
    "validation_summary_to_dict",
]
