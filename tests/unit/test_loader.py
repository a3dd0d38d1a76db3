"""Tests for token file discovery, flattening, and reference resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from tokenfig.core.config import BuildConfig, BuildSection
from tokenfig.core.errors import ReferenceCycleError, TokenLoadError
from tokenfig.core.fileset import discover_token_files, is_dark_source
from tokenfig.core.loader import flatten_tokens, load_token_dictionary


class TestFileset:
    """Test token source discovery."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("colors.dark.json", True),
            ("brand/colors.dark.json", True),
            ("colors.json", False),
            ("darkness.json", False),
            ("dark.json", False),
        ],
    )
    def test_is_dark_source(self, name, expected):
        assert is_dark_source(Path(name)) is expected

    def test_custom_marker(self):
        assert is_dark_source("colors.night.json", marker="night")
        assert not is_dark_source("colors.dark.json", marker="night")

    def test_discover_splits_and_sorts(self, project_dir, write_tokens):
        write_tokens("b.json", {})
        write_tokens("a.json", {})
        write_tokens("nested/c.dark.json", {})
        write_tokens("a.dark.json", {})

        light, dark = discover_token_files(project_dir, BuildConfig())

        assert [p.name for p in light] == ["a.json", "b.json"]
        assert [p.name for p in dark] == ["a.dark.json", "c.dark.json"]

    def test_discover_uses_configured_patterns(self, project_dir, write_tokens):
        write_tokens("a.json", {})
        (project_dir / "other").mkdir()
        (project_dir / "other" / "x.json").write_text("{}")
        config = BuildConfig(build=BuildSection(source=["other/*.json"]))

        light, dark = discover_token_files(project_dir, config)

        assert [p.name for p in light] == ["x.json"]
        assert dark == []


class TestFlatten:
    """Test DTCG tree flattening."""

    def test_document_order_and_paths(self):
        data = {
            "color": {
                "primary": {"$type": "color", "$value": "#FF0000"},
                "secondary": {"$type": "color", "$value": "#00FF00"},
            },
            "space": {"sm": {"$type": "dimension", "$value": "4px"}},
        }
        records = flatten_tokens(data, Path("tokens/base.json"))

        assert [r["path"] for r in records] == [
            ("color", "primary"),
            ("color", "secondary"),
            ("space", "sm"),
        ]

    def test_group_type_is_inherited(self):
        data = {
            "color": {
                "$type": "color",
                "$description": "Brand colors",
                "brand": {"red": {"$value": "#FF0000"}},
                "weight": {"$type": "fontWeight", "$value": "bold"},
            }
        }
        records = flatten_tokens(data, Path("tokens/base.json"))

        assert [r["type"] for r in records] == ["color", "fontWeight"]

    def test_description_kept(self):
        data = {"gap": {"$type": "dimension", "$value": "8px", "$description": "Default gap"}}
        (record,) = flatten_tokens(data, Path("tokens/base.json"))
        assert record["description"] == "Default gap"

    def test_non_object_node_rejected(self):
        with pytest.raises(TokenLoadError, match="color.primary"):
            flatten_tokens({"color": {"primary": "#FF0000"}}, Path("tokens/base.json"))


class TestLoadTokenDictionary:
    """Test loading files into a resolved TokenDictionary."""

    def test_resolves_reference_chain(self, write_tokens):
        path = write_tokens(
            "color.json",
            {
                "color": {
                    "$type": "color",
                    "base": {"red": {"$value": "#FF0000"}},
                    "brand": {"$value": "{color.base.red}"},
                    "primary": {"$value": "{color.brand}"},
                }
            },
        )
        dictionary = load_token_dictionary([path], [])
        primary = dictionary.lookup("color.primary")

        assert primary is not None
        assert primary.raw_value == "{color.brand}"
        assert primary.resolved_value == "#FF0000"
        assert primary.is_reference

    def test_unresolved_reference_kept(self, write_tokens):
        path = write_tokens("a.json", {"x": {"$type": "color", "$value": "{nope.missing}"}})
        (token,) = load_token_dictionary([path], [])
        assert token.resolved_value == "{nope.missing}"

    def test_embedded_references_interpolated(self, write_tokens):
        path = write_tokens(
            "a.json",
            {
                "size": {"sm": {"$type": "dimension", "$value": "1px"}},
                "border": {"thin": {"$type": "border", "$value": "{size.sm} solid"}},
            },
        )
        dictionary = load_token_dictionary([path], [])
        assert dictionary.lookup("border.thin").resolved_value == "1px solid"

    def test_references_inside_objects(self, write_tokens):
        path = write_tokens(
            "a.json",
            {
                "color": {"ink": {"$type": "color", "$value": "#111111"}},
                "shadow": {
                    "card": {"$type": "shadow", "$value": {"color": "{color.ink}", "blur": "4px"}}
                },
            },
        )
        dictionary = load_token_dictionary([path], [])
        assert dictionary.lookup("shadow.card").resolved_value == {
            "color": "#111111",
            "blur": "4px",
        }

    def test_cycle_raises(self, write_tokens):
        path = write_tokens(
            "a.json",
            {"a": {"$type": "color", "$value": "{b}"}, "b": {"$type": "color", "$value": "{a}"}},
        )
        with pytest.raises(ReferenceCycleError, match="Circular reference"):
            load_token_dictionary([path], [])

    def test_light_tokens_first_then_dark(self, write_tokens):
        dark = write_tokens("c.dark.json", {"bg": {"$type": "color", "$value": "#000000"}})
        light = write_tokens("c.json", {"bg": {"$type": "color", "$value": "#FFFFFF"}})

        dictionary = load_token_dictionary([light], [dark])
        tokens = dictionary.all_tokens

        assert [dictionary.is_dark(t) for t in tokens] == [False, True]
        assert dictionary.lookup("bg").raw_value == "#FFFFFF"
        assert dictionary.lookup("bg", dark=True).raw_value == "#000000"

    def test_dark_references_see_dark_overrides(self, write_tokens):
        light = write_tokens(
            "c.json",
            {
                "bg": {"$type": "color", "$value": "#FFFFFF"},
                "accent": {"$type": "color", "$value": "#3366FF"},
                "surface": {"$type": "color", "$value": "{bg}"},
            },
        )
        dark = write_tokens(
            "c.dark.json",
            {
                "bg": {"$type": "color", "$value": "#000000"},
                "surface": {"$type": "color", "$value": "{bg}"},
                "link": {"$type": "color", "$value": "{accent}"},
            },
        )
        dictionary = load_token_dictionary([light], [dark])
        by_theme = {(t.dotted_path, dictionary.is_dark(t)): t for t in dictionary}

        assert by_theme[("surface", False)].resolved_value == "#FFFFFF"
        assert by_theme[("surface", True)].resolved_value == "#000000"
        assert by_theme[("link", True)].resolved_value == "#3366FF"

    def test_invalid_json(self, write_tokens, project_dir):
        path = project_dir / "tokens" / "broken.json"
        path.write_text("{ not json")
        with pytest.raises(TokenLoadError, match="Invalid JSON"):
            load_token_dictionary([path], [])

    def test_root_must_be_object(self, write_tokens):
        path = write_tokens("list.json", [1, 2, 3])
        with pytest.raises(TokenLoadError, match="root must be a JSON object"):
            load_token_dictionary([path], [])

    def test_missing_file(self, project_dir):
        with pytest.raises(TokenLoadError, match="Cannot read"):
            load_token_dictionary([project_dir / "tokens" / "absent.json"], [])
