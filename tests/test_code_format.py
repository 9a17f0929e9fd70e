"""
Unit Tests for the C snippet formatter used by the question card
"""

from c_quiz.services.code_format import format_code


class TestFormatCode:

    def test_format_when_empty_then_empty(self):
        assert format_code("") == ""
        assert format_code(None) == ""

    def test_format_when_nested_blocks_then_indented(self):
        code = "int main(){int a=1;for(i=0;i<3;i++){a++;}return 0;}"
        assert format_code(code) == (
            "int main() {\n"
            "  int a=1;\n"
            "  for(i=0; i<3; i++) {\n"
            "    a++;\n"
            "  }\n"
            "  return 0;\n"
            "}"
        )

    def test_format_when_no_braces_then_one_statement_per_line(self):
        assert format_code("int x=1;x++;") == "int x=1;\nx++;"

    def test_format_when_unbalanced_close_then_indent_not_negative(self):
        out = format_code("}a;")
        assert not out.startswith(" ")
