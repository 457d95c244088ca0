import pytest

from vitest_guard.security import sanitize_file_content
from vitest_guard.security.patterns import MAX_CONTENT_BYTES


class TestSanitizeFileContent:
    def test_removes_script_tags(self):
        malicious = 'Hello <script>alert("xss")</script> World'
        assert sanitize_file_content(malicious) == "Hello  World"

    def test_removes_script_tags_with_attributes_across_lines(self):
        malicious = 'a<SCRIPT type="text/javascript">\nsteal();\n</Script >b'
        assert sanitize_file_content(malicious) == "ab"

    def test_removes_every_script_block(self):
        content = "1<script>x</script>2<script>y</script>3"
        assert sanitize_file_content(content) == "123"

    def test_unclosed_script_tag_is_left_alone(self):
        content = "<script>never closed"
        assert sanitize_file_content(content) == content

    def test_removes_dangerous_protocols(self):
        malicious = 'Click javascript:alert("xss") here'
        assert sanitize_file_content(malicious) == 'Click alert("xss") here'

    @pytest.mark.parametrize("content,expected", [
        ('<a href="VBScript:msgbox(1)">', '<a href="msgbox(1)">'),
        ("src=data:text/html;base64,AAAA", "src=text/html;base64,AAAA"),
        ("metadata: kept", "metadata: kept"),
    ])
    def test_protocol_must_be_a_token_prefix(self, content, expected):
        assert sanitize_file_content(content) == expected

    @pytest.mark.parametrize("content", [
        "java\x00script:alert(1)",
        "jav<script></script>ascript:alert(1)",
        "javascript:javascript:alert(1)",
    ])
    def test_removal_cannot_reassemble_a_protocol(self, content):
        assert sanitize_file_content(content) == "alert(1)"

    def test_removal_cannot_reassemble_a_script_block(self):
        content = "<scr<script></script>ipt>alert(1)</script>"
        assert sanitize_file_content(content) == ""

    def test_removes_control_characters_but_keeps_whitespace(self):
        content = "line1\n\tline2\r\n\x00\x07\x1b[0m\x7fend"
        assert sanitize_file_content(content) == "line1\n\tline2\r\n[0mend"

    def test_removes_lone_surrogates(self):
        assert sanitize_file_content("a\ud800b") == "ab"

    def test_truncates_to_max_bytes(self):
        content = "a" * (MAX_CONTENT_BYTES + 10)
        assert len(sanitize_file_content(content)) == MAX_CONTENT_BYTES

    def test_truncation_does_not_split_characters(self):
        content = "é" * MAX_CONTENT_BYTES
        result = sanitize_file_content(content)
        assert len(result.encode("utf-8")) <= MAX_CONTENT_BYTES
        assert set(result) == {"é"}

    def test_truncation_happens_after_removal(self):
        script = "<script>" + "x" * MAX_CONTENT_BYTES + "</script>"
        assert sanitize_file_content(script + "tail") == "tail"

    @pytest.mark.parametrize("value", [None, 42, b"bytes", ["list"], {"a": 1}])
    def test_handles_non_string_input(self, value):
        assert sanitize_file_content(value) == ""

    @pytest.mark.parametrize("content", [
        "plain text",
        'Hello <script>alert("xss")</script> World',
        "javajavascript:script:",
        "<scr<script></script>ipt>x</script>tail",
        "data:data::",
        "a\x00javascript\x00:b",
        "",
    ])
    def test_is_idempotent(self, content):
        once = sanitize_file_content(content)
        assert sanitize_file_content(once) == once
