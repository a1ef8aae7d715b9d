from mini_postman_cli.json_format import format_json, looks_like_json


class TestFormatJson:
    def test_empty_object(self):
        assert format_json("{}") == "{}\n"

    def test_empty_array(self):
        assert format_json("[]") == "[]\n"

    def test_nested_document(self):
        expected = (
            "{\n"
            '  "a": 1,\n'
            '  "b": [\n'
            "    1,\n"
            "    2\n"
            "  ]\n"
            "}\n"
        )
        assert format_json('{"a":1,"b":[1,2]}') == expected

    def test_empty_container_inside_object(self):
        assert format_json('{"a":[],"b":{}}') == '{\n  "a": [],\n  "b": {}\n}\n'

    def test_structural_characters_inside_strings_untouched(self):
        assert format_json('{"a":"x{y"}') == '{\n  "a": "x{y"\n}\n'
        assert format_json('["a, b: [c]"]') == '[\n  "a, b: [c]"\n]\n'

    def test_whitespace_inside_strings_kept(self):
        assert format_json('["a  b"]') == '[\n  "a  b"\n]\n'

    def test_escaped_quote_does_not_end_string(self):
        assert format_json('{"a":"x\\"}y"}') == '{\n  "a": "x\\"}y"\n}\n'

    def test_escape_check_skips_whitespace(self):
        # backslash then a space still escapes the quote, so the string never closes
        assert format_json('["a\\ ",1]') == '[\n  "a\\ ",1]\n'

    def test_whitespace_outside_strings_dropped(self):
        assert format_json('{ "a" :\n\t1 }') == '{\n  "a": 1\n}\n'

    def test_already_indented_input_is_reformatted(self):
        pretty = '{\n    "a": [\n        true\n    ]\n}'
        assert format_json(pretty) == '{\n  "a": [\n    true\n  ]\n}\n'

    def test_extra_closer_does_not_raise(self):
        assert format_json("}") == "\n}\n"
        assert format_json("[1]]") == "[\n  1\n]\n]\n"

    def test_unclosed_input_does_not_raise(self):
        assert format_json("[1") == "[\n  1\n"
        assert format_json("{") == "{\n"

    def test_non_json_text_passes_through(self):
        assert format_json("hello world") == "helloworld\n"

    def test_empty_input(self):
        assert format_json("") == "\n"


class TestLooksLikeJson:
    def test_object_and_array(self):
        assert looks_like_json('{"a":1}')
        assert looks_like_json("[1]")

    def test_other_text(self):
        assert not looks_like_json("hello")
        assert not looks_like_json("")
        assert not looks_like_json(' {"a":1}')
