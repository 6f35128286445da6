import unittest
from textwrap import dedent

from lol_parser.lexer import LolLexer, tokenize
from lol_parser.tokens import Keyword, Token, TokenType


class TestLolLexer(unittest.TestCase):
    """Test suite for the LOLHTML lexer component."""

    def assert_tokens(self, text, expected_types):
        """Helper to verify token sequence types match expectations (EOF excluded)."""
        tokens = tokenize(text)[:-1]
        actual_types = [t.type for t in tokens]
        self.assertEqual(
            actual_types,
            expected_types,
            f"\nExpected: {[t.name for t in expected_types]}"
            f"\nGot: {[t.name for t in actual_types]}",
        )

    def assert_token_values(self, text, expected_tokens):
        """Helper to verify both token types and values (EOF excluded)."""
        tokens = tokenize(text)[:-1]
        for actual, (exp_type, exp_value) in zip(tokens, expected_tokens):
            self.assertEqual(
                actual.type,
                exp_type,
                f"Expected token type {exp_type.name}, got {actual.type.name}",
            )
            self.assertEqual(
                actual.value, exp_value, f"Expected value '{exp_value}', got '{actual.value}'"
            )
        self.assertEqual(
            len(tokens), len(expected_tokens), "Number of tokens doesn't match expected"
        )

    def keywords(self, text):
        return [t.keyword for t in tokenize(text) if t.type == TokenType.KEYWORD]

    def test_empty_input(self):
        """Empty input produces only EOF."""
        tokens = tokenize("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)

    def test_eof_is_sticky(self):
        """Once the input is exhausted every call returns EOF."""
        lexer = LolLexer("hi")
        self.assertEqual(lexer.next_token().type, TokenType.WORD)
        for _ in range(3):
            self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_plain_text(self):
        """Words, punctuation runs and whitespace are separate tokens."""
        self.assert_token_values(
            "Hello, world!",
            [
                (TokenType.WORD, "Hello"),
                (TokenType.TEXT, ","),
                (TokenType.TEXT, " "),
                (TokenType.WORD, "world"),
                (TokenType.TEXT, "!"),
            ],
        )

    def test_whitespace_run_is_one_token(self):
        self.assert_token_values(
            "a \t\n  b",
            [
                (TokenType.WORD, "a"),
                (TokenType.TEXT, " \t\n  "),
                (TokenType.WORD, "b"),
            ],
        )

    def test_punctuation_run(self):
        self.assert_token_values('..."?!%/:', [(TokenType.TEXT, '..."?!%/:')])

    def test_other_characters_are_single_text_tokens(self):
        self.assert_token_values(
            "x@@y",
            [
                (TokenType.WORD, "x"),
                (TokenType.TEXT, "@"),
                (TokenType.TEXT, "@"),
                (TokenType.WORD, "y"),
            ],
        )

    def test_non_ascii_letters_are_text(self):
        self.assert_token_values(
            "café",
            [(TokenType.WORD, "caf"), (TokenType.TEXT, "é")],
        )

    def test_word_characters(self):
        self.assert_token_values("my_var2", [(TokenType.WORD, "my_var2")])

    def test_keyword_after_hash(self):
        self.assert_tokens("#HAI", [TokenType.HASH, TokenType.KEYWORD])
        self.assertEqual(self.keywords("#HAI"), [Keyword.HAI])

    def test_keyword_case_insensitive(self):
        tokens = tokenize("#kThXbYe")
        self.assertEqual(tokens[1].type, TokenType.KEYWORD)
        self.assertEqual(tokens[1].keyword, Keyword.KTHXBYE)
        self.assertEqual(tokens[1].value, "kThXbYe")

    def test_whitespace_after_hash_keeps_context(self):
        """'#  HAI' still reads HAI as a keyword."""
        self.assertEqual(self.keywords("#  HAI"), [Keyword.HAI])

    def test_unknown_word_after_hash(self):
        self.assert_token_values("#foo", [(TokenType.HASH, "#"), (TokenType.WORD, "foo")])

    def test_unknown_word_clears_context(self):
        """After a non-keyword word, the next word is prose again."""
        self.assert_tokens(
            "#foo HAI",
            [TokenType.HASH, TokenType.WORD, TokenType.TEXT, TokenType.WORD],
        )

    def test_keyword_pairs(self):
        """Leading keywords license the following word."""
        self.assertEqual(self.keywords("#MAEK HEAD"), [Keyword.MAEK, Keyword.HEAD])
        self.assertEqual(self.keywords("#GIMMEH BOLD"), [Keyword.GIMMEH, Keyword.BOLD])
        self.assertEqual(self.keywords("#LEMME SEE"), [Keyword.LEMME, Keyword.SEE])
        self.assertEqual(self.keywords("#I HAZ"), [Keyword.I, Keyword.HAZ])

    def test_non_leading_keyword_does_not_license(self):
        """PARAGRAF is not followed by a keyword, so 'list' stays a word."""
        tokens = tokenize("#MAEK PARAGRAF list")
        self.assertEqual(self.keywords("#MAEK PARAGRAF list"), [Keyword.MAEK, Keyword.PARAGRAF])
        self.assertEqual(tokens[-2].type, TokenType.WORD)
        self.assertEqual(tokens[-2].value, "list")

    def test_punctuation_clears_context(self):
        """MAEK followed by punctuation no longer licenses a keyword."""
        self.assertEqual(self.keywords("#MAEK, HEAD"), [Keyword.MAEK])

    def test_keyword_after_keyword_without_hash(self):
        """HAI is not a leader: the word after it is prose."""
        self.assert_tokens(
            "#HAI hai",
            [TokenType.HASH, TokenType.KEYWORD, TokenType.TEXT, TokenType.WORD],
        )

    def test_keywords_in_prose(self):
        """Keyword spellings in running text are plain words."""
        for keyword in Keyword:
            with self.subTest(keyword=keyword):
                text = f"some {keyword.value} text {keyword.value.lower()}"
                self.assertEqual(self.keywords(text), [])

    def test_variable_definition(self):
        """The word after the HAZ name may be IT."""
        self.assert_token_values(
            "#I HAZ name IT IZ 5",
            [
                (TokenType.HASH, "#"),
                (TokenType.KEYWORD, "I"),
                (TokenType.TEXT, " "),
                (TokenType.KEYWORD, "HAZ"),
                (TokenType.TEXT, " "),
                (TokenType.WORD, "name"),
                (TokenType.TEXT, " "),
                (TokenType.KEYWORD, "IT"),
                (TokenType.TEXT, " "),
                (TokenType.KEYWORD, "IZ"),
                (TokenType.TEXT, " "),
                (TokenType.WORD, "5"),
            ],
        )

    def test_variable_name_spelled_like_keyword(self):
        """The name slot after HAZ never produces a keyword."""
        tokens = tokenize("#I HAZ title IT IZ x")
        self.assertEqual(tokens[5].type, TokenType.WORD)
        self.assertEqual(tokens[5].value, "title")
        self.assertEqual(self.keywords("#I HAZ title IT IZ x"),
                         [Keyword.I, Keyword.HAZ, Keyword.IT, Keyword.IZ])

    def test_variable_value_is_prose(self):
        self.assertEqual(
            self.keywords("#I HAZ x IT IZ it is a list"),
            [Keyword.I, Keyword.HAZ, Keyword.IT, Keyword.IZ],
        )

    def test_positions(self):
        """Lines are 1-based, columns 0-based and reset after a newline."""
        text = dedent("""
            #HAI
              hello
        """).strip()
        tokens = tokenize(text)
        self.assertEqual((tokens[0].line, tokens[0].column), (1, 0))  # '#'
        self.assertEqual((tokens[1].line, tokens[1].column), (1, 1))  # HAI
        self.assertEqual((tokens[2].line, tokens[2].column), (1, 4))  # '\n  '
        self.assertEqual((tokens[3].line, tokens[3].column), (2, 2))  # hello
        self.assertEqual((tokens[4].line, tokens[4].column), (2, 7))  # EOF

    def test_tokenize_resets_state(self):
        lexer = LolLexer()
        lexer.tokenize("#MAEK")
        tokens = lexer.tokenize("HEAD")
        self.assertEqual(tokens[0].type, TokenType.WORD)


class TestTokenModel(unittest.TestCase):
    """Tests for Token and Keyword helpers."""

    def test_keyword_lookup(self):
        self.assertIs(Keyword.lookup("mKaY"), Keyword.MKAY)
        self.assertIs(Keyword.lookup("paragraf"), Keyword.PARAGRAF)
        self.assertIsNone(Keyword.lookup("paragraph"))

    def test_lexemes(self):
        self.assertEqual(Token(TokenType.HASH, "#", 1, 0).lexeme, "#")
        self.assertEqual(Token(TokenType.WORD, "Hi", 1, 0).lexeme, "Hi")
        self.assertEqual(Token(TokenType.TEXT, " ,", 1, 0).lexeme, " ,")
        self.assertEqual(Token(TokenType.EOF, "", 1, 0).lexeme, "<EOF>")
        self.assertEqual(
            Token(TokenType.KEYWORD, "oic", 1, 0, keyword=Keyword.OIC).lexeme, "OIC"
        )

    def test_is_blank(self):
        self.assertTrue(Token(TokenType.TEXT, " \n", 1, 0).is_blank())
        self.assertFalse(Token(TokenType.TEXT, " , ", 1, 0).is_blank())
        self.assertFalse(Token(TokenType.WORD, "x", 1, 0).is_blank())

    def test_repr(self):
        token = Token(TokenType.KEYWORD, "HAI", 2, 3, keyword=Keyword.HAI)
        self.assertEqual(repr(token), "Token(KEYWORD, 'HAI', line=2, col=3, keyword=HAI)")


if __name__ == "__main__":
    unittest.main()
