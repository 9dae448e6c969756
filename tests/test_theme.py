"""Tests for theme discovery."""

import yaml

from calendula.lib.theme import discover_themes, get_theme_chain, get_theme_info


def _make_theme(themes_dir, name, meta=None, raw=None):
    theme_dir = themes_dir / name
    (theme_dir / "templates").mkdir(parents=True)
    if meta is not None:
        (theme_dir / "theme.yaml").write_text(yaml.safe_dump(meta))
    if raw is not None:
        (theme_dir / "theme.yaml").write_text(raw)
    return theme_dir


class TestDiscoverThemes:
    def test_missing_directory(self, tmp_path):
        assert discover_themes(tmp_path / "themes") == []

    def test_only_directories_with_templates(self, tmp_path):
        themes = tmp_path / "themes"
        _make_theme(themes, "b-theme")
        _make_theme(themes, "a-theme")
        (themes / "not-a-theme").mkdir()
        (themes / "README.txt").write_text("hi")

        assert [t.directory_name for t in discover_themes(themes)] == ["a-theme", "b-theme"]

    def test_metadata(self, tmp_path):
        themes = tmp_path / "themes"
        _make_theme(
            themes,
            "tevily-child",
            {"name": "Tevily Child", "version": "1.2", "author": "Studio", "parent": "tevily"},
        )

        info = get_theme_info("tevily-child", themes)

        assert info.name == "Tevily Child"
        assert info.version == "1.2"
        assert info.author == "Studio"
        assert info.parent == "tevily"
        assert info.templates_dir == themes / "tevily-child" / "templates"

    def test_defaults_without_metadata(self, tmp_path):
        themes = tmp_path / "themes"
        _make_theme(themes, "plain")

        info = get_theme_info("plain", themes)

        assert info.name == "plain"
        assert info.parent == ""

    def test_broken_metadata_is_ignored(self, tmp_path, caplog):
        themes = tmp_path / "themes"
        _make_theme(themes, "broken", raw="name: [unclosed")

        info = get_theme_info("broken", themes)

        assert info.name == "broken"
        assert "theme.yaml" in caplog.text

    def test_unknown_theme(self, tmp_path):
        assert get_theme_info("ghost", tmp_path / "themes") is None


class TestThemeChain:
    def test_follows_parents(self, tmp_path):
        themes = tmp_path / "themes"
        _make_theme(themes, "grandchild", {"parent": "child"})
        _make_theme(themes, "child", {"parent": "root"})
        _make_theme(themes, "root")

        chain = get_theme_chain("grandchild", themes)

        assert [t.directory_name for t in chain] == ["grandchild", "child", "root"]

    def test_stops_on_cycle(self, tmp_path):
        themes = tmp_path / "themes"
        _make_theme(themes, "a", {"parent": "b"})
        _make_theme(themes, "b", {"parent": "a"})

        assert [t.directory_name for t in get_theme_chain("a", themes)] == ["a", "b"]

    def test_stops_at_missing_parent(self, tmp_path, caplog):
        themes = tmp_path / "themes"
        _make_theme(themes, "orphan", {"parent": "gone"})

        assert [t.directory_name for t in get_theme_chain("orphan", themes)] == ["orphan"]
        assert "gone" in caplog.text
