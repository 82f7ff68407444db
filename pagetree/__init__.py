"""
pagetree - layer-tree resolution engine for a visual website builder.

Turns a stored page tree plus collection data into a render-ready tree:

    from pagetree import PageResolver
    page = await PageResolver(data_source).resolve_page(layers, is_published=True)
"""

from pagetree.services.page_resolver import PageResolver, ResolvedPage

__version__ = "0.1.0"

__all__ = ["PageResolver", "ResolvedPage", "__version__"]
