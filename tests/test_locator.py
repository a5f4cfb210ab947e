"""Tests for ResourceLocator lookups and enumeration.

Uses real directories and real zip archives built in tmp_path.
"""

from pathlib import Path

import pytest

from loading_utils.errors import ResourceLoadError
from loading_utils.errors import ResourceNotFoundError
from loading_utils.locator import ResourceLocator
from loading_utils.locator import archive_entry_child
from loading_utils.locator import entry_in_directory
from loading_utils.locator import strip_leading_slash
from loading_utils.search_path import SearchPath


def _locator(*entries) -> ResourceLocator:
    return ResourceLocator(SearchPath(entries))


class TestHelpers:
    def test_strip_leading_slash(self):
        assert strip_leading_slash("/config/app.conf") == "config/app.conf"
        assert strip_leading_slash("\\config") == "config"
        assert strip_leading_slash("config") == "config"
        assert strip_leading_slash("") == ""

    def test_entry_in_directory(self):
        assert entry_in_directory("pkg/foo/a.txt", "pkg/")
        assert not entry_in_directory("pkg/", "pkg/")
        assert not entry_in_directory("other/a.txt", "pkg/")
        assert not entry_in_directory(None, "pkg/")
        assert not entry_in_directory("pkg/a.txt", "")

    @pytest.mark.parametrize(
        ("entry", "parent", "expected"),
        [
            ("pkg/foo/a.txt", "pkg", "foo"),
            ("pkg/foo/bar/baz.txt", "pkg", "foo"),
            ("pkg/bar.txt", "pkg", "bar.txt"),
            ("pkg/bar.txt", "pkg/", "bar.txt"),
            ("pkg/foo/", "pkg", "foo"),
            ("a/b/c/d.txt", "a/b", "c"),
        ],
    )
    def test_archive_entry_child(self, entry, parent, expected):
        assert archive_entry_child(entry, parent) == expected


class TestResourceExists:
    def test_found_in_directory_root(self, dir_root):
        assert _locator(dir_root).resource_exists("config/app.conf")

    def test_directory_counts_as_existing(self, dir_root):
        assert _locator(dir_root).resource_exists("config/extra")

    def test_leading_slash_is_ignored(self, dir_root):
        assert _locator(dir_root).resource_exists("/config/app.conf")

    def test_found_in_archive_exact_entry(self, make_archive):
        archive = make_archive("libs.zip", {"pkg/data.txt": "x"})
        assert _locator(archive).resource_exists("pkg/data.txt")

    def test_found_in_archive_as_parent_directory(self, make_archive):
        archive = make_archive("libs.zip", {"pkg/sub/data.txt": "x"})
        locator = _locator(archive)

        assert locator.resource_exists("pkg")
        assert locator.resource_exists("pkg/sub")
        assert not locator.resource_exists("pk")

    def test_missing_everywhere(self, dir_root, make_archive):
        archive = make_archive("libs.zip", {"pkg/data.txt": "x"})
        assert not _locator(dir_root, archive).resource_exists("nope.txt")

    def test_empty_search_path(self):
        assert not _locator().resource_exists("config/app.conf")

    def test_inaccessible_roots(self, tmp_path):
        assert not _locator(tmp_path / "gone", tmp_path / "gone.zip").resource_exists("config/app.conf")

    def test_corrupt_archive_is_skipped(self, tmp_path, dir_root):
        broken = tmp_path / "broken.zip"
        broken.write_bytes(b"not a zip file")
        locator = _locator(broken, dir_root)

        assert locator.resource_exists("config/app.conf")
        assert not locator.resource_exists("pkg")

    def test_short_circuits_on_first_match(self, dir_root, make_archive, monkeypatch):
        archive = make_archive("libs.zip", {"config/app.conf": "x"})
        opened = []

        import loading_utils.locator as locator_module

        original = locator_module._archive_names

        def tracking(path):
            opened.append(path)
            return original(path)

        monkeypatch.setattr(locator_module, "_archive_names", tracking)

        assert _locator(dir_root, archive).resource_exists("config/app.conf")
        assert opened == []

    def test_later_roots_are_not_classified_after_match(self, tmp_path, dir_root, monkeypatch):
        import loading_utils.search_path as search_path_module

        checked = []
        original = search_path_module.is_directory

        def tracking(path):
            checked.append(path)
            return original(path)

        monkeypatch.setattr(search_path_module, "is_directory", tracking)

        assert _locator(dir_root, tmp_path / "later-a", tmp_path / "later-b").resource_exists("config/app.conf")
        assert checked == [dir_root]


class TestFind:
    def test_find_first_skips_missing_root(self, tmp_path, dir_root):
        locator = _locator(tmp_path / "dirA-missing", dir_root)

        stream = locator.find_first("config/app.conf")

        assert stream is not None
        with stream:
            assert stream.read() == b"name = dir-root\n"

    def test_find_first_uses_search_order(self, tmp_path, dir_root):
        other = tmp_path / "other"
        (other / "config").mkdir(parents=True)
        (other / "config" / "app.conf").write_text("name = other\n")

        with _locator(other, dir_root).find_first("config/app.conf") as stream:
            assert stream.read() == b"name = other\n"

    def test_find_first_missing_returns_none(self, dir_root):
        assert _locator(dir_root).find_first("config/missing.conf") is None

    def test_find_first_ignores_directories(self, dir_root):
        assert _locator(dir_root).find_first("config/extra") is None

    def test_find_first_does_not_open_archive_entries(self, make_archive):
        archive = make_archive("libs.zip", {"config/app.conf": "x"})
        assert _locator(archive).find_first("config/app.conf") is None

    def test_find_all_returns_stream_per_directory_root(self, tmp_path, dir_root, make_archive):
        other = tmp_path / "other"
        (other / "config").mkdir(parents=True)
        (other / "config" / "app.conf").write_text("name = other\n")
        archive = make_archive("libs.zip", {"config/app.conf": "archived"})

        streams = _locator(dir_root, archive, tmp_path / "missing", other).find_all("config/app.conf")
        try:
            contents = [stream.read() for stream in streams]
        finally:
            for stream in streams:
                stream.close()

        assert contents == [b"name = dir-root\n", b"name = other\n"]

    def test_find_all_missing_is_empty(self, dir_root):
        assert _locator(dir_root).find_all("nothing.txt") == []

    @pytest.fixture
    def unreadable_first_root(self, tmp_path, monkeypatch):
        """Two roots holding config/app.conf, where the first cannot be opened."""
        roots = []
        for name in ("dirA", "dirB"):
            (tmp_path / name / "config").mkdir(parents=True)
            (tmp_path / name / "config" / "app.conf").write_bytes(name.encode())
            roots.append(tmp_path / name)

        denied = roots[0] / "config" / "app.conf"
        real_open = Path.open

        def open_or_deny(self, *args, **kwargs):
            if self == denied:
                raise PermissionError(13, "Permission denied", str(self))
            return real_open(self, *args, **kwargs)

        monkeypatch.setattr(Path, "open", open_or_deny)
        return roots

    def test_find_first_skips_unopenable_file(self, unreadable_first_root):
        stream = _locator(*unreadable_first_root).find_first("config/app.conf")

        assert stream is not None
        with stream:
            assert stream.read() == b"dirB"

    def test_find_all_skips_unopenable_file(self, unreadable_first_root):
        streams = _locator(*unreadable_first_root).find_all("config/app.conf")
        try:
            contents = [stream.read() for stream in streams]
        finally:
            for stream in streams:
                stream.close()

        assert contents == [b"dirB"]

    def test_find_file_and_find_all_files(self, tmp_path, dir_root):
        other = tmp_path / "other"
        (other / "config").mkdir(parents=True)
        (other / "config" / "app.conf").write_text("")
        locator = _locator(dir_root, other)

        assert locator.find_file("config/app.conf") == dir_root / "config" / "app.conf"
        assert locator.find_all_files("/config/app.conf") == [
            dir_root / "config" / "app.conf",
            other / "config" / "app.conf",
        ]

    def test_find_root_ending_with(self, tmp_path, dir_root):
        locator = _locator(tmp_path / "missing-root", dir_root)

        assert locator.find_root_ending_with("dir-root") == dir_root
        assert locator.find_root_ending_with("missing-root") is None
        assert locator.find_root_ending_with("nothing") is None


class TestChildNames:
    def test_directory_children(self, dir_root):
        assert _locator(dir_root).directory_child_names("config") == ["app.conf", "extra"]

    def test_directory_children_repeat_across_roots(self, tmp_path, dir_root):
        other = tmp_path / "other"
        (other / "config").mkdir(parents=True)
        (other / "config" / "app.conf").write_text("")

        names = _locator(dir_root, other).directory_child_names("/config")

        assert names == ["app.conf", "extra", "app.conf"]

    def test_archive_children_are_deduplicated(self, make_archive):
        archive = make_archive(
            "libs.zip",
            {"pkg/foo/a.txt": "a", "pkg/foo/b.txt": "b", "pkg/bar.txt": "c", "other/x.txt": "x"},
        )

        assert _locator(archive).archive_child_names("pkg") == {"foo", "bar.txt"}

    def test_archive_children_trailing_slash(self, make_archive):
        archive = make_archive("libs.zip", {"pkg/foo/a.txt": "a"})
        assert _locator(archive).archive_child_names("/pkg/") == {"foo"}

    def test_archive_children_require_directory_boundary(self, make_archive):
        archive = make_archive("libs.zip", {"pkgother/a.txt": "a", "pkg/b.txt": "b"})
        assert _locator(archive).archive_child_names("pkg") == {"b.txt"}

    def test_archive_entries(self, make_archive):
        first = make_archive("one.zip", {"pkg/a.txt": "a", "pkg/": ""})
        second = make_archive("two.zip", {"pkg/sub/b.txt": "b"})

        entries = _locator(first, second).archive_entries("pkg")

        assert entries == ["pkg/a.txt", "pkg/sub/b.txt"]

    def test_archive_entries_empty_directory_name(self, make_archive):
        archive = make_archive("libs.zip", {"pkg/a.txt": "a"})
        assert _locator(archive).archive_entries("") == []

    def test_child_names_merge_directories_and_archives(self, dir_root, make_archive):
        archive = make_archive(
            "libs.zip",
            {"config/app.conf": "x", "config/defaults/a.conf": "a", "config/defaults/b.conf": "b"},
        )

        names = _locator(dir_root, archive).child_names_under_directory("config")

        assert names == {"app.conf", "extra", "defaults"}

    def test_child_names_missing_directory(self, dir_root):
        assert _locator(dir_root).child_names_under_directory("nothing") == set()


class TestReading:
    def test_open_reader(self, dir_root):
        with _locator(dir_root).open_reader("config", "app.conf") as reader:
            assert reader.read() == "name = dir-root\n"

    def test_open_reader_missing_raises(self, dir_root):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            _locator(dir_root).open_reader("config", "missing.conf")
        assert "Cannot find file named: config/missing.conf" in str(exc_info.value)

    def test_load_resource_as_string(self, dir_root):
        assert _locator(dir_root).load_resource_as_string("config", "app.conf") == "name = dir-root\n"

    def test_load_resource_as_string_decodes_latin1(self, tmp_path):
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "latin.txt").write_bytes("café".encode("iso-8859-1"))

        assert _locator(tmp_path).load_resource_as_string("data", "latin.txt") == "café"

    def test_load_resource_passes_text_to_handler(self, dir_root):
        result = _locator(dir_root).load_resource("config", "app.conf", lambda text: text.split(" = "))
        assert result == ["name", "dir-root\n"]

    def test_load_resource_wraps_handler_errors(self, dir_root):
        def failing(text):
            raise ValueError("bad content")

        with pytest.raises(ResourceLoadError) as exc_info:
            _locator(dir_root).load_resource("config", "app.conf", failing)

        assert exc_info.value.full_file_path == "config/app.conf"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_load_resource_missing_is_not_wrapped(self, dir_root):
        with pytest.raises(ResourceNotFoundError):
            _locator(dir_root).load_resource("config", "missing.conf", str)


def test_default_search_path_is_sys_path(monkeypatch, tmp_path):
    import sys

    monkeypatch.setattr(sys, "path", [str(tmp_path)])
    locator = ResourceLocator()

    assert locator.search_path.entries == (Path(tmp_path),)
