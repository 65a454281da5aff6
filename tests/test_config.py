"""Tests for folio.config — RenderConfig and option composition."""

from pathlib import Path

import pytest

from folio.config import (
    RenderConfig,
    configure,
    with_autoescape,
    with_cache,
    with_encoding,
    with_extension,
    with_fragments_root,
    with_functions,
    with_pages_root,
    with_settings,
    with_unique_names,
)
from folio.errors import ConfigurationError
from folio.templating.functions import BUILTIN_FUNCTIONS


def _translate(key: str) -> str:
    return f"t:{key}"


def _other_translate(key: str) -> str:
    return f"o:{key}"


class TestRenderConfig:
    def test_defaults(self) -> None:
        cfg = RenderConfig()
        assert cfg.fragments_root == "templates"
        assert cfg.pages_root == "templates/pages"
        assert cfg.cache_enabled is False
        assert cfg.extension == ".html"
        assert cfg.autoescape is True
        assert cfg.encoding == "utf-8"
        assert cfg.unique_names is False
        assert dict(cfg.functions) == BUILTIN_FUNCTIONS

    def test_frozen(self) -> None:
        cfg = RenderConfig()
        with pytest.raises(AttributeError):
            cfg.cache_enabled = True  # type: ignore[misc]

    def test_functions_read_only(self) -> None:
        cfg = RenderConfig()
        with pytest.raises(TypeError):
            cfg.functions["x"] = _translate  # type: ignore[index]


class TestConfigure:
    def test_no_options_gives_defaults(self) -> None:
        assert configure() == RenderConfig()

    def test_applies_options_in_order(self) -> None:
        cfg = configure(
            with_pages_root("a"),
            with_fragments_root(Path("frag")),
            with_pages_root("b"),
            with_cache(),
        )
        assert cfg.pages_root == "b"
        assert cfg.fragments_root == Path("frag")
        assert cfg.cache_enabled is True

    def test_later_cache_option_wins(self) -> None:
        assert configure(with_cache(), with_cache(False)).cache_enabled is False

    def test_custom_base(self) -> None:
        base = RenderConfig(pages_root="views")
        assert configure(with_cache(), base=base).pages_root == "views"

    def test_options_return_new_configs(self) -> None:
        base = RenderConfig()
        cfg = configure(with_cache(), base=base)
        assert base.cache_enabled is False
        assert cfg is not base

    def test_scalar_options(self) -> None:
        cfg = configure(
            with_extension(".kida"),
            with_autoescape(False),
            with_encoding("latin-1"),
            with_unique_names(),
        )
        assert cfg.extension == ".kida"
        assert cfg.autoescape is False
        assert cfg.encoding == "latin-1"
        assert cfg.unique_names is True


class TestFunctionMerging:
    def test_builtins_kept(self) -> None:
        cfg = configure(with_functions({"translate": _translate}))
        assert cfg.functions["translate"] is _translate
        for name in BUILTIN_FUNCTIONS:
            assert name in cfg.functions

    def test_same_name_replaced(self) -> None:
        cfg = configure(
            with_functions({"translate": _translate}),
            with_functions({"translate": _other_translate}),
        )
        assert cfg.functions["translate"] is _other_translate

    def test_can_override_builtin(self) -> None:
        cfg = configure(with_functions({"coalesce": _translate}))
        assert cfg.functions["coalesce"] is _translate

    def test_order_independent_content(self) -> None:
        a = configure(with_functions({"x": _translate}), with_functions({"y": _other_translate}))
        b = configure(with_functions({"y": _other_translate}), with_functions({"x": _translate}))
        assert dict(a.functions) == dict(b.functions)


class TestWithSettings:
    def test_sets_all_four(self) -> None:
        cfg = configure(
            with_settings(
                fragments_root="frag",
                pages_root="pages",
                cache_enabled=True,
                functions={"translate": _translate},
            )
        )
        assert cfg.fragments_root == "frag"
        assert cfg.pages_root == "pages"
        assert cfg.cache_enabled is True
        assert cfg.functions["translate"] is _translate
        assert "coalesce" in cfg.functions

    def test_none_keeps_current(self) -> None:
        cfg = configure(with_pages_root("views"), with_cache(), with_settings(fragments_root="frag"))
        assert cfg.pages_root == "views"
        assert cfg.cache_enabled is True
        assert cfg.fragments_root == "frag"


class TestWithEncoding:
    def test_rejects_unknown_codec(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown template encoding 'bogus'"):
            with_encoding("bogus")

    def test_accepts_codec_aliases(self) -> None:
        assert configure(with_encoding("latin_1")).encoding == "latin_1"


class TestWithExtension:
    @pytest.mark.parametrize("bad", ["html", ".", ""])
    def test_rejects_invalid(self, bad: str) -> None:
        with pytest.raises(ConfigurationError, match="must start with a dot"):
            with_extension(bad)
