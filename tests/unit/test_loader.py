"""Tests for descriptor loading and merging."""

import io

import pytest
from gen_mode.errors import InputOutputError, ParseError
from gen_mode.loader import load_documents, merge_documents, parse_document, source_name


class TestParseDocument:
    def test_json(self):
        assert parse_document(b'{"data": []}', "modes.json") == {"data": []}

    def test_yaml_by_suffix(self):
        raw = b"data:\n  - value: dev\n    default: true\n"
        assert parse_document(raw, "modes.yaml") == {"data": [{"value": "dev", "default": True}]}

    def test_empty_yaml_is_empty_mapping(self):
        assert parse_document(b"", "modes.yml") == {}

    def test_malformed_json(self):
        with pytest.raises(ParseError) as exc_info:
            parse_document(b'{"data": [', "broken.json")
        assert exc_info.value.source == "broken.json"

    def test_malformed_yaml(self):
        with pytest.raises(ParseError):
            parse_document(b"data: [dev", "broken.yaml")

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ParseError, match="top level must be a mapping"):
            parse_document(b"[1, 2]", "list.json")

    def test_invalid_utf8(self):
        with pytest.raises(ParseError):
            parse_document(b"\xff\xfe{", "bad.json")


class TestMergeDocuments:
    def test_later_keys_overwrite(self):
        merged = merge_documents({"name": "a", "extra": 1}, {"name": "b"})
        assert merged == {"name": "b", "extra": 1}

    def test_data_accumulates(self):
        merged = merge_documents({"data": [{"value": "a"}]}, {"data": [{"value": "b"}]})
        assert merged["data"] == [{"value": "a"}, {"value": "b"}]

    def test_non_list_data_overwrites(self):
        merged = merge_documents({"data": [{"value": "a"}]}, {"data": "oops"})
        assert merged["data"] == "oops"


class TestLoadDocuments:
    def test_single_file(self, write_descriptor, dev_prod):
        path = write_descriptor(dev_prod)
        assert load_documents([path]) == dev_prod

    def test_files_merge_in_order(self, write_descriptor):
        first = write_descriptor({"data": [{"value": "dev"}], "owner": "a"}, "a.json")
        second = write_descriptor("data:\n  - value: prod\nowner: b\n", "b.yaml")

        merged = load_documents([first, second])

        assert [entry["value"] for entry in merged["data"]] == ["dev", "prod"]
        assert merged["owner"] == "b"

    def test_stream_source(self):
        stream = io.BytesIO(b'{"data": [{"value": "dev"}]}')
        assert load_documents([stream]) == {"data": [{"value": "dev"}]}

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.json"
        with pytest.raises(InputOutputError) as exc_info:
            load_documents([missing])
        assert exc_info.value.path == str(missing)
        assert exc_info.value.operation == "read"

    def test_no_sources(self):
        assert load_documents([]) == {}


class TestSourceName:
    def test_path(self, tmp_path):
        assert source_name(tmp_path / "a.json") == str(tmp_path / "a.json")

    def test_anonymous_stream(self):
        assert source_name(io.BytesIO(b"")) == "<stream>"
