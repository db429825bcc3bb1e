"""
Taxonomy module - Tags and categories.
"""

from innohub.modules.taxonomy.models import Category, Tag, article_tags, project_tags

__all__ = ["Category", "Tag", "article_tags", "project_tags"]
