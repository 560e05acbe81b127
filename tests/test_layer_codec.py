"""
Unit Tests for codelayers.core.layer_codec

Tests for:
    - layer_to_json: tree shape
    - layer_of_json / loads: field validation and error kinds
"""

import json
import pytest

from codelayers.core import (
    DuplicateFieldError,
    ExtraFieldError,
    FieldTypeError,
    LayerDecodeError,
    MissingFieldError,
)
from codelayers.core.layer_codec import dumps, layer_of_json, layer_to_json, loads, parse_json


class TestEncode:

    def test_tree_shape(self, deadcode_layer, layer_json):
        assert layer_to_json(deadcode_layer) == layer_json

    def test_fractions_written_as_floats(self):
        from codelayers.core import FileInfo, Layer
        layer = Layer(files=[("f.py", FileInfo(macro_level=[("dead", 1)]))], kinds={"dead": "red"})
        text = dumps(layer)
        assert "1.0" in text
        assert json.loads(text)["files"][0][1]["macro_level"][0][1] == 1.0


class TestDecode:

    def test_round_trip_through_text(self, deadcode_layer):
        assert loads(dumps(deadcode_layer)) == deadcode_layer

    def test_plain_dict_tree(self, deadcode_layer, layer_json):
        assert layer_of_json(layer_json) == deadcode_layer

    def test_integer_fraction_accepted(self, layer_json):
        layer_json["files"][0][1]["macro_level"] = [["dead_file", 1]]
        layer = layer_of_json(layer_json)
        assert layer.file_info("src/a.py").macro_level == (("dead_file", 1.0),)

    def test_empty_layer(self):
        layer = loads('{"files": [], "kinds": []}')
        assert layer.files == ()
        assert layer.kinds == ()

    def test_stale_kinds_are_loaded(self):
        layer = loads('{"files": [["f.py", {"micro_level": [[1, "gone"]], "macro_level": []}]],'
                      ' "kinds": []}')
        assert layer.file_info("f.py").micro_level == ((1, "gone"),)


class TestDecodeErrors:

    def test_missing_top_level_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            loads('{"files": []}')
        assert exc_info.value.field == "kinds"
        assert exc_info.value.path == "$"

    def test_missing_file_info_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            loads('{"files": [["f.py", {"micro_level": []}]], "kinds": []}')
        assert exc_info.value.field == "macro_level"
        assert exc_info.value.path == "$.files[0][1]"

    def test_duplicate_top_level_field(self):
        with pytest.raises(DuplicateFieldError) as exc_info:
            loads('{"files": [], "kinds": [], "kinds": []}')
        assert exc_info.value.field == "kinds"

    def test_duplicate_file_info_field(self):
        text = ('{"files": [["f.py", {"micro_level": [], "micro_level": [], "macro_level": []}]],'
                ' "kinds": []}')
        with pytest.raises(DuplicateFieldError) as exc_info:
            loads(text)
        assert exc_info.value.field == "micro_level"

    def test_extra_field_rejected_when_strict(self):
        with pytest.raises(ExtraFieldError) as exc_info:
            loads('{"files": [], "kinds": [], "name": "deadcode"}')
        assert exc_info.value.field == "name"

    def test_extra_field_ignored_when_lenient(self):
        layer = loads('{"files": [], "kinds": [["dead", "red"]], "name": "deadcode"}', strict=False)
        assert layer.kinds == (("dead", "red"),)

    def test_duplicate_detected_even_when_lenient(self):
        with pytest.raises(DuplicateFieldError):
            loads('{"files": [], "files": [], "kinds": []}', strict=False)

    def test_error_kinds_are_distinct(self):
        errors = []
        for text in ['{"files": []}',
                     '{"files": [], "files": [], "kinds": []}',
                     '{"files": [], "kinds": [], "x": 1}']:
            with pytest.raises(LayerDecodeError) as exc_info:
                loads(text)
            errors.append(type(exc_info.value))
        assert errors == [MissingFieldError, DuplicateFieldError, ExtraFieldError]

    @pytest.mark.parametrize("text, path", [
        ('[]', "$"),
        ('{"files": {}, "kinds": []}', "$.files"),
        ('{"files": [["f.py"]], "kinds": []}', "$.files[0]"),
        ('{"files": [[1, {"micro_level": [], "macro_level": []}]], "kinds": []}', "$.files[0][0]"),
        ('{"files": [["f.py", {"micro_level": [["1", "dead"]], "macro_level": []}]], "kinds": []}',
         "$.files[0][1].micro_level[0][0]"),
        ('{"files": [["f.py", {"micro_level": [[true, "dead"]], "macro_level": []}]], "kinds": []}',
         "$.files[0][1].micro_level[0][0]"),
        ('{"files": [["f.py", {"micro_level": [[1.5, "dead"]], "macro_level": []}]], "kinds": []}',
         "$.files[0][1].micro_level[0][0]"),
        ('{"files": [["f.py", {"micro_level": [], "macro_level": [["dead", "0.5"]]}]], "kinds": []}',
         "$.files[0][1].macro_level[0][1]"),
        ('{"files": [], "kinds": [["dead", null]]}', "$.kinds[0][1]"),
        ('{"files": [], "kinds": [["dead", "red", "extra"]]}', "$.kinds[0]"),
        ('{"files": [], "kinds": [["", "red"]]}', "$.kinds[0][0]"),
        ('{"files": [["f.py", {"micro_level": [[1, ""]], "macro_level": []}]], "kinds": []}',
         "$.files[0][1].micro_level[0][1]"),
        ('{"files": [["f.py", {"micro_level": [], "macro_level": [["", 1.0]]}]], "kinds": []}',
         "$.files[0][1].macro_level[0][0]"),
    ])
    def test_type_mismatch(self, text, path):
        with pytest.raises(FieldTypeError) as exc_info:
            loads(text)
        assert exc_info.value.path == path

    def test_invalid_json_text(self):
        with pytest.raises(LayerDecodeError):
            parse_json('{"files": [')

    def test_message_names_field_and_path(self):
        with pytest.raises(MissingFieldError) as exc_info:
            loads('{"files": [["f.py", {"macro_level": []}]], "kinds": []}')
        message = str(exc_info.value)
        assert "micro_level" in message
        assert "$.files[0][1]" in message

    def test_decode_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            loads('{"files": []}')
