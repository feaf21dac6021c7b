"""The exported API functions for rendering generic element trees."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdtree/api.py
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any, Optional, Union

from mdtree.ast.lowering import lower_tree
from mdtree.ast.nodes import Document
from mdtree.exceptions import InvalidOptionsError
from mdtree.options.markdown import MarkdownRendererOptions
from mdtree.renderers.markdown import MarkdownRenderer
from mdtree.tree.builder import Child, mount
from mdtree.tree.debug import debug_timer, format_ast, format_tree, is_debug_enabled
from mdtree.tree.store import Container, NodeId, TreeStore

logger = logging.getLogger(__name__)

OptionsLike = Union[MarkdownRendererOptions, Mapping[str, Any], None]


def _resolve_options(options: OptionsLike, **kwargs: Any) -> MarkdownRendererOptions:
    """Turn an options object, a plain mapping or None into renderer options.

    Parameters
    ----------
    options : MarkdownRendererOptions, Mapping or None
        Options object, camelCase/snake_case mapping, or None for defaults
    kwargs : Any
        Individual option values overriding ``options``

    Returns
    -------
    MarkdownRendererOptions
        Resolved options

    Raises
    ------
    InvalidOptionsError
        If ``options`` is neither an options object, a mapping nor None
    ValueError
        If an option value is not allowed

    """
    resolved: MarkdownRendererOptions
    if options is None:
        resolved = MarkdownRendererOptions()
    elif isinstance(options, MarkdownRendererOptions):
        resolved = options
    elif isinstance(options, Mapping):
        resolved = MarkdownRendererOptions.from_mapping(options)
    else:
        raise InvalidOptionsError(
            renderer_name="markdown",
            expected_type=MarkdownRendererOptions,
            received_type=type(options),
        )

    if kwargs:
        resolved = resolved.create_updated(**kwargs)
    return resolved


def to_ast(store: TreeStore, root: Optional[NodeId]) -> Document:
    """Lower a generic element tree to the Markdown AST without rendering it.

    Parameters
    ----------
    store : TreeStore
        Store holding the tree
    root : int or None
        Handle of the root node; None yields an empty document

    Returns
    -------
    Document
        Lowered AST document

    Raises
    ------
    UnknownRoleError
        If the tree holds an element whose role is outside the vocabulary
    PropertyTypeError
        If an element property has the wrong type

    """
    return lower_tree(store, root)


def render(
    store: TreeStore,
    root: Optional[NodeId],
    options: OptionsLike = None,
    **kwargs: Any,
) -> str:
    """Render a generic element tree to Markdown.

    The tree is lowered to the Markdown AST and serialized. Nothing is
    cached between calls; every render recomputes the full output.

    Parameters
    ----------
    store : TreeStore
        Store holding the tree
    root : int or None
        Handle of the root node; None renders an empty document
    options : MarkdownRendererOptions, Mapping, optional
        Renderer options, or a mapping accepted by
        :meth:`MarkdownRendererOptions.from_mapping`
    kwargs : Any
        Individual renderer options overriding ``options``

    Returns
    -------
    str
        Markdown text ending with exactly one newline

    Raises
    ------
    InvalidOptionsError
        If ``options`` has an unsupported type
    UnknownRoleError
        If the tree holds an element whose role is outside the vocabulary
    PropertyTypeError
        If an element property has the wrong type

    Examples
    --------
    Render a tree assembled through the store:

        >>> store = TreeStore()
        >>> heading = store.create_element("heading", {"depth": 2})
        >>> store.append_child(heading, store.create_text("Hello"))
        >>> render(store, heading)
        '## Hello\\n'

    With style options:

        >>> render(store, root, {"bulletMarker": "*"})
        >>> render(store, root, rule_style="_")

    """
    renderer_options = _resolve_options(options, **kwargs)
    debug = is_debug_enabled(logger)

    if debug:
        logger.debug(f"Generic tree:\n{format_tree(store, root)}")

    with debug_timer(logger, "Lowering"):
        document = lower_tree(store, root)

    if debug:
        logger.debug(f"Markdown AST:\n{format_ast(document)}")

    with debug_timer(logger, "Rendering"):
        markdown = MarkdownRenderer(renderer_options).render_to_string(document)

    if debug:
        logger.debug(f"Rendered Markdown:\n{markdown}")

    return markdown


def render_container(container: Container, options: OptionsLike = None, **kwargs: Any) -> str:
    """Render the root of a container.

    An empty container renders as a single newline.

    Parameters
    ----------
    container : Container
        Container whose root is rendered
    options : MarkdownRendererOptions, Mapping, optional
        Renderer options
    kwargs : Any
        Individual renderer options overriding ``options``

    Returns
    -------
    str
        Markdown text

    """
    return render(container.store, container.root, options, **kwargs)


def render_element(description: Child, options: OptionsLike = None, **kwargs: Any) -> str:
    """Mount a declarative element description and render it.

    The description is replayed through the store operations into a fresh
    container, exactly as an external driver would build it.

    Parameters
    ----------
    description : Element, str or iterable
        Element description built with :func:`mdtree.tree.h` or the helpers
        in :mod:`mdtree.tree.builder`
    options : MarkdownRendererOptions, Mapping, optional
        Renderer options
    kwargs : Any
        Individual renderer options overriding ``options``

    Returns
    -------
    str
        Markdown text

    Examples
    --------
        >>> from mdtree.tree.builder import heading, paragraph, strong
        >>> render_element([heading(1, "Title"), paragraph("Some ", strong("bold"), " text")])
        '# Title\\n\\nSome **bold** text\\n'

    """
    container = mount(description)
    return render_container(container, options, **kwargs)


def from_ast(
    ast_doc: Document,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    options: OptionsLike = None,
    **kwargs: Any,
) -> Optional[str]:
    """Render a lowered AST document to Markdown.

    Parameters
    ----------
    ast_doc : Document
        AST document, typically from :func:`to_ast`
    output : str, Path, IO[bytes], IO[str], or None, optional
        Output destination. If None, the Markdown text is returned.
    options : MarkdownRendererOptions, Mapping, optional
        Renderer options
    kwargs : Any
        Individual renderer options overriding ``options``

    Returns
    -------
    str or None
        Markdown text when ``output`` is None, otherwise None

    """
    renderer = MarkdownRenderer(_resolve_options(options, **kwargs))
    if output is None:
        return renderer.render_to_string(ast_doc)
    renderer.render(ast_doc, output)
    return None
