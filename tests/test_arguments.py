"""도구 인자 추출 테스트"""

import pytest

from src.arguments import get_int, get_list, get_string, require_string
from src.errors import ToolInputError


class TestGetString:
    def test_present(self):
        assert get_string({"language": "de"}, "language") == ("de", False)

    def test_missing(self):
        assert get_string({}, "language") == (None, False)

    def test_null_is_missing(self):
        assert get_string({"language": None}, "language") == (None, False)

    def test_wrong_type(self):
        assert get_string({"language": 5}, "language") == (None, True)

    def test_empty_string_is_present(self):
        assert get_string({"time_range": ""}, "time_range") == ("", False)


class TestGetInt:
    def test_float_truncated_toward_zero(self):
        assert get_int({"page": 2.9}, "page") == (2, False)
        assert get_int({"page": -1.7}, "page") == (-1, False)

    def test_int(self):
        assert get_int({"safe_search": 0}, "safe_search") == (0, False)

    def test_bool_is_not_a_number(self):
        assert get_int({"page": True}, "page") == (None, True)

    def test_string_is_wrong_type(self):
        assert get_int({"page": "2"}, "page") == (None, True)

    def test_infinity(self):
        assert get_int({"page": float("inf")}, "page") == (None, True)


class TestGetList:
    def test_split_and_trim(self):
        assert get_list({"categories": " general , news "}, "categories") == (["general", "news"], False)

    def test_empty_means_default(self):
        assert get_list({"engines": ""}, "engines") == (None, False)
        assert get_list({"engines": " , "}, "engines") == (None, False)

    def test_wrong_type(self):
        assert get_list({"engines": ["google"]}, "engines") == (None, True)

    def test_engine_names_with_spaces(self):
        assert get_list({"engines": "google images, bing images"}, "engines") == (
            ["google images", "bing images"], False,
        )


class TestRequireString:
    def test_present(self):
        assert require_string({"query": "cats"}, "query") == "cats"

    def test_empty_allowed(self):
        assert require_string({"query": ""}, "query") == ""

    def test_missing(self):
        with pytest.raises(ToolInputError, match="required"):
            require_string({}, "query")

    def test_wrong_type(self):
        with pytest.raises(ToolInputError, match="must be a string"):
            require_string({"query": 42}, "query")
