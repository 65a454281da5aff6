"""Render configuration.

RenderConfig is a frozen dataclass — immutable after creation. It is built
by folding options over the defaults::

    config = configure(
        with_fragments_root("templates"),
        with_pages_root("templates/pages"),
        with_cache(),
        with_functions({"translate": translate}),
    )

Later options override earlier ones for scalar settings. Function maps are
merged: same-named entries are replaced, everything else is kept.
"""

from __future__ import annotations

import codecs
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

from folio.errors import ConfigurationError
from folio.templating.functions import BUILTIN_FUNCTIONS, FunctionMap, merge_functions


def _builtin_functions() -> Mapping[str, Callable[..., Any]]:
    return MappingProxyType(dict(BUILTIN_FUNCTIONS))


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Where templates live and how bundles are built. Immutable.

    Attributes:
        fragments_root: Directory of shared fragments compiled into every bundle.
        pages_root: Directory of page templates, one bundle per file.
        cache_enabled: Build all bundles once up front instead of per render.
        functions: Callables installed as filters and globals in every bundle.
        extension: Markup file suffix, including the dot.
        autoescape: HTML-escape interpolated values.
        encoding: Encoding for reading templates and for the rendered bytes.
        unique_names: Fail the build when two pages share a base name
            instead of keeping the later one.
    """

    fragments_root: str | Path = "templates"
    pages_root: str | Path = "templates/pages"
    cache_enabled: bool = False
    functions: Mapping[str, Callable[..., Any]] = field(default_factory=_builtin_functions)
    extension: str = ".html"
    autoescape: bool = True
    encoding: str = "utf-8"
    unique_names: bool = False


type Option = Callable[[RenderConfig], RenderConfig]


def configure(*options: Option, base: RenderConfig | None = None) -> RenderConfig:
    """Apply *options* in order over *base* (defaults if omitted)."""
    config = base or RenderConfig()
    for option in options:
        config = option(config)
    return config


# -- Options --


def with_fragments_root(path: str | Path) -> Option:
    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, fragments_root=path)

    return option


def with_pages_root(path: str | Path) -> Option:
    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, pages_root=path)

    return option


def with_cache(enabled: bool = True) -> Option:
    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, cache_enabled=enabled)

    return option


def with_functions(functions: FunctionMap) -> Option:
    """Merge *functions* into the registry; same names are replaced."""

    def option(config: RenderConfig) -> RenderConfig:
        merged = merge_functions(config.functions, functions)
        return replace(config, functions=MappingProxyType(merged))

    return option


def with_extension(extension: str) -> Option:
    if not extension.startswith(".") or len(extension) < 2:
        msg = f"Template extension must start with a dot, got {extension!r}"
        raise ConfigurationError(msg)

    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, extension=extension)

    return option


def with_autoescape(enabled: bool = True) -> Option:
    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, autoescape=enabled)

    return option


def with_encoding(encoding: str) -> Option:
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        msg = f"Unknown template encoding {encoding!r}"
        raise ConfigurationError(msg) from exc

    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, encoding=encoding)

    return option


def with_unique_names(enabled: bool = True) -> Option:
    def option(config: RenderConfig) -> RenderConfig:
        return replace(config, unique_names=enabled)

    return option


def with_settings(
    *,
    fragments_root: str | Path | None = None,
    pages_root: str | Path | None = None,
    cache_enabled: bool | None = None,
    functions: FunctionMap | None = None,
) -> Option:
    """Apply any subset of the four core settings in one option.

    Settings left as ``None`` keep their current value.
    """

    def option(config: RenderConfig) -> RenderConfig:
        changes: dict[str, Any] = {}
        if fragments_root is not None:
            changes["fragments_root"] = fragments_root
        if pages_root is not None:
            changes["pages_root"] = pages_root
        if cache_enabled is not None:
            changes["cache_enabled"] = cache_enabled
        if functions is not None:
            changes["functions"] = MappingProxyType(merge_functions(config.functions, functions))
        return replace(config, **changes)

    return option
