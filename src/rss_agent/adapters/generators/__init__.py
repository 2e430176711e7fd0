"""Feed document generators."""

from rss_agent.adapters.generators.rss2_generator import Rss2Generator

__all__ = ["Rss2Generator"]
