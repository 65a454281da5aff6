"""Bundle builder — one compiled kida bundle per page template.

Each bundle is a private kida Environment whose loader holds the page plus
every shared fragment, keyed by base file name, so a page can write::

    {% extends "layout.html" %}
    {% block content %}{% include "nav.html" %}...{% end %}

wherever ``layout.html`` and ``nav.html`` sit under the fragments root.
Every source is compiled when the bundle is built, so a malformed fragment
fails the build rather than the first request that touches it.

Fragments are compiled again for every page; bundles share no state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from kida import DictLoader, Environment

from folio.errors import CompileError
from folio.templating.discovery import find_markup_files

if TYPE_CHECKING:
    from kida.template import Template

    from folio.config import RenderConfig

logger = logging.getLogger("folio.bundle")

type BundleCache = Mapping[str, Bundle]


@dataclass(frozen=True, slots=True)
class Bundle:
    """A page compiled together with all shared fragments.

    Templates keep only a weak reference to their environment, so the
    bundle holds the environment to keep it alive.
    """

    name: str
    page: Path
    sources: tuple[Path, ...]
    environment: Environment = field(repr=False, compare=False)
    template: Template = field(repr=False, compare=False)

    def execute(self, context: Mapping[str, Any]) -> str:
        """Render the page with *context* and return the full output."""
        return self.template.render(dict(context))


def compile_bundle(
    page: str | Path,
    fragments: Sequence[str | Path],
    functions: Mapping[str, Callable[..., Any]],
    *,
    autoescape: bool = True,
    encoding: str = "utf-8",
) -> Bundle:
    """Compile *page* with every fragment and the function registry.

    The bundle is named after the page's base file name. A fragment with
    the same base name as the page is shadowed by the page.

    Raises:
        CompileError: A source cannot be read or fails to compile.
    """
    page_path = Path(page)
    name = page_path.name

    sources: dict[str, str] = {}
    origins: dict[str, Path] = {}
    for path in (*(Path(f) for f in fragments), page_path):
        try:
            sources[path.name] = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise CompileError(name, path, f"cannot read template: {exc}") from exc
        origins[path.name] = path

    env = Environment(loader=DictLoader(sources), autoescape=autoescape)
    env.update_filters(dict(functions))
    for fn_name, fn in functions.items():
        env.add_global(fn_name, fn)

    for template_name in sources:
        if template_name == name:
            continue
        _compile(env, template_name, page=name, path=origins[template_name])
    template = _compile(env, name, page=name, path=page_path)

    return Bundle(
        name=name,
        page=page_path,
        sources=tuple(origins.values()),
        environment=env,
        template=template,
    )


def _compile(env: Environment, template_name: str, *, page: str, path: Path) -> Template:
    try:
        return env.get_template(template_name)
    except Exception as exc:
        raise CompileError(page, path, str(exc)) from exc


def build_cache(config: RenderConfig) -> BundleCache:
    """Compile a bundle for every page under ``config.pages_root``.

    Discovery and compile errors abort the whole build; no partial cache
    is returned. Two pages with the same base name keep the one discovered
    last, unless ``config.unique_names`` is set.

    Raises:
        DiscoveryError: A root cannot be walked.
        CompileError: A bundle fails to compile, or a name collides while
            ``unique_names`` is set.
    """
    pages = find_markup_files(config.pages_root, config.extension)
    fragments = find_markup_files(config.fragments_root, config.extension)

    for fn_name in config.functions:
        logger.debug("function registered: %s", fn_name)

    cache: dict[str, Bundle] = {}
    for page in pages:
        bundle = compile_bundle(
            page,
            fragments,
            config.functions,
            autoescape=config.autoescape,
            encoding=config.encoding,
        )
        previous = cache.get(bundle.name)
        if previous is not None:
            if config.unique_names:
                detail = f"name already used by {previous.page}"
                raise CompileError(bundle.name, page, detail)
            logger.warning(
                "bundle %r from %s replaces %s", bundle.name, page, previous.page
            )
        cache[bundle.name] = bundle

    logger.info(
        "built %d bundle(s) from %s with %d fragment(s)",
        len(cache),
        config.pages_root,
        len(fragments),
    )
    return MappingProxyType(cache)
