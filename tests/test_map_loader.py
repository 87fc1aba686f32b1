"""Tests for map file loading."""

import json

import numpy as np
import pytest

from py_flood.core.exceptions import ConfigurationError, MapFormatError
from py_flood.core.grid import GridPoint
from py_flood.core.map_loader import load_world_map, parse_text_map

TEXT_MAP = """\
# Small valley
# threshold: 4.5
# source: 0 0
# source: 2, 3
1 2 3 4
5 6 7 8
0 1 2 3
"""


class TestTextMaps:
    """Test the plain-text format."""

    def test_load(self, tmp_path):
        path = tmp_path / "valley.txt"
        path.write_text(TEXT_MAP, encoding="utf-8")

        world = load_world_map(path)

        assert world.dimensions == (3, 4)
        assert world.threshold == 4.5
        assert world.water_sources == (GridPoint(0, 0), GridPoint(2, 3))
        np.testing.assert_array_equal(world.elevations[1], [5, 6, 7, 8])

    def test_no_sources(self):
        world = parse_text_map("# threshold: 1\n0 0\n0 0\n")
        assert world.water_sources == ()

    def test_single_row(self):
        world = parse_text_map("# threshold: 1\n0 1 2\n")
        assert world.dimensions == (1, 3)

    def test_missing_threshold(self):
        with pytest.raises(MapFormatError, match="threshold"):
            parse_text_map("# source: 0 0\n1 2\n")

    def test_duplicate_threshold(self):
        with pytest.raises(MapFormatError, match="more than once"):
            parse_text_map("# threshold: 1\n# threshold: 2\n1 2\n")

    def test_bad_threshold(self):
        with pytest.raises(MapFormatError, match="invalid threshold"):
            parse_text_map("# threshold: high\n1 2\n")

    def test_no_rows(self):
        with pytest.raises(MapFormatError, match="no elevation rows"):
            parse_text_map("# threshold: 1\n")

    def test_ragged_rows(self):
        with pytest.raises(MapFormatError):
            parse_text_map("# threshold: 1\n1 2 3\n4 5\n")

    def test_non_numeric(self):
        with pytest.raises(MapFormatError):
            parse_text_map("# threshold: 1\n1 two 3\n")

    @pytest.mark.parametrize("line", ["# source: 0", "# source: a b", "# source: 1 2 3", "# source:"])
    def test_malformed_source(self, line):
        with pytest.raises(MapFormatError, match="invalid source"):
            parse_text_map(f"# threshold: 5\n{line}\n1 1\n1 1\n")

    def test_source_off_map(self):
        with pytest.raises(MapFormatError, match="outside"):
            parse_text_map("# threshold: 1\n# source: 5 5\n1 2\n")


class TestJsonMaps:
    """Test the JSON format."""

    def write(self, tmp_path, document):
        path = tmp_path / "map.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    def test_load(self, tmp_path):
        path = self.write(
            tmp_path,
            {"threshold": 3, "elevations": [[1, 2], [3, 4]], "sources": [[1, 0]]},
        )
        world = load_world_map(path)

        assert world.dimensions == (2, 2)
        assert world.threshold == 3.0
        assert world.water_sources == (GridPoint(1, 0),)

    def test_sources_optional(self, tmp_path):
        path = self.write(tmp_path, {"threshold": 3, "elevations": [[1]]})
        assert load_world_map(path).water_sources == ()

    @pytest.mark.parametrize(
        "document",
        [
            {"elevations": [[1]]},
            {"threshold": 1, "elevations": []},
            {"threshold": 1, "elevations": [[1, 2], [3]]},
            {"threshold": 1, "elevations": [["a"]]},
            {"threshold": 1, "elevations": [[1]], "sources": [[0]]},
            {"threshold": 1, "elevations": [[1]], "sources": [[0, 1]]},
        ],
    )
    def test_invalid_documents(self, tmp_path, document):
        with pytest.raises(MapFormatError):
            load_world_map(self.write(tmp_path, document))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MapFormatError, match="Invalid JSON"):
            load_world_map(path)


class TestMissingFiles:
    def test_missing_file(self, tmp_path):
        with pytest.raises(MapFormatError, match="File not found"):
            load_world_map(tmp_path / "nowhere.txt")

    def test_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_world_map(tmp_path / "nowhere.json")
