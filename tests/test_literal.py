from restassured_gen.generator.literal import escape_java, java_string


class TestEscapeJava:
    def test_clean_text_unchanged(self):
        assert escape_java("application/json") == "application/json"

    def test_backslash(self):
        assert escape_java("a\\b") == "a\\\\b"

    def test_quote(self):
        assert escape_java('say "hi"') == 'say \\"hi\\"'

    def test_newline(self):
        assert escape_java("a\nb") == "a\\nb"

    def test_carriage_return(self):
        assert escape_java("a\r\nb") == "a\\r\\nb"

    def test_backslash_escaped_before_quote(self):
        # An existing backslash-quote must not collapse into a single escape
        assert escape_java('\\"') == '\\\\\\"'

    def test_applying_twice_double_escapes(self):
        once = escape_java('"')
        assert once == '\\"'
        assert escape_java(once) == '\\\\\\"'

    def test_lone_surrogate_becomes_unicode_escape(self):
        assert escape_java("x\ud800y") == "x\\ud800y"

    def test_astral_character_kept(self):
        assert escape_java("\U0001f600") == "\U0001f600"


class TestJavaString:
    def test_quotes_and_escapes(self):
        assert java_string('a"b') == '"a\\"b"'

    def test_empty(self):
        assert java_string("") == '""'
