"""Tests for loading signature files from disk."""

import pytest

from shapesig.data.load_dataset import (
    UNKNOWN,
    extract_from_file,
    extract_from_folder,
    parse_filename,
)


class TestParseFilename:
    """Metadata from filenames."""

    def test_standard_name(self):
        assert parse_filename("s07n003.art") == ("ART", "07", "03")

    def test_method_case_insensitive(self):
        method, label, sample = parse_filename("s12n010.E34")
        assert method == "E34"
        assert label == "12"

    def test_unknown_method(self):
        method, label, _ = parse_filename("s01n001.txt")
        assert method == UNKNOWN
        assert label == "01"

    def test_unrecognized_layout(self):
        assert parse_filename("shape.gfd")[0] == "GFD"
        assert parse_filename("foo.txt") == (UNKNOWN, UNKNOWN, UNKNOWN)

    def test_custom_methods(self):
        assert parse_filename("s02n001.abc", methods=("ABC",))[0] == "ABC"


class TestExtractFromFile:
    """Single file parsing."""

    def test_reads_values(self, tmp_path):
        path = tmp_path / "s07n003.zrk"
        path.write_text("1.0\n2.5\n\n-3e-2\n")

        record = extract_from_file(path)

        assert record.values == pytest.approx((1.0, 2.5, -0.03))
        assert (record.method, record.label, record.sample) == ("ZRK", "07", "03")

    def test_skips_bad_lines(self, tmp_path):
        path = tmp_path / "s01n001.art"
        path.write_text("1.0\nabc\n3\n")
        assert extract_from_file(path).values == (1.0, 3.0)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "s01n001.art"
        path.write_text("")
        assert extract_from_file(path).values == ()


class TestExtractFromFolder:
    """Folder parsing."""

    def test_reads_files_in_name_order(self, tmp_path):
        (tmp_path / "s02n001.yng").write_text("2.0\n")
        (tmp_path / "s01n001.yng").write_text("1.0\n")
        (tmp_path / "nested").mkdir()

        records = extract_from_folder(tmp_path)

        assert [r.label for r in records] == ["01", "02"]
        assert [r.values for r in records] == [(1.0,), (2.0,)]
        assert all(r.method == "YNG" for r in records)

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            extract_from_folder(tmp_path / "missing")

    def test_empty_folder(self, tmp_path):
        assert extract_from_folder(tmp_path) == []


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
