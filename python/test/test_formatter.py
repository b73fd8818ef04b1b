# coding:utf-8
'''
Formatting engine: run state and general properties.
'''

import unittest
from tsqlfmt import lexer
from tsqlfmt.config import LocalConfig, KeywordCase
from tsqlfmt.exceptions import SqlFormatterException
from tsqlfmt.formatter import TSqlFormatter
from tsqlfmt.tokenutils import Token, TokenCategory

SAMPLES = [
    "select a from t where b=1",
    "select a from t where b in (1,2,3)",
    "case when a=1 then 'x' else 'y' end",
    "select * from (select 1) x",
    "select * from (select a, b from t where b=1) x",
    "select a from t where x in (select b from u where c=1)",
    "select coalesce(a, b), [my col] from [my table]",
    "select a -- note\nfrom t",
]


def run(formatter, sql):
    state = formatter.new_state()
    for token in lexer.tokenize(sql):
        formatter.process(state, token)
    return state


class Test(unittest.TestCase):

    def setUp(self):
        self.formatter = TSqlFormatter(LocalConfig())

    def test_content_is_kept(self):
        for sql in SAMPLES:
            formatted = self.formatter.format(sql)
            self.assertEqual("".join(formatted.split()).upper(), "".join(sql.split()).upper())

    def test_content_is_kept_verbatim_without_casing(self):
        formatter = TSqlFormatter(LocalConfig().set_keyword_case(KeywordCase.unchanged))
        for sql in SAMPLES:
            self.assertEqual("".join(formatter.format(sql).split()), "".join(sql.split()))

    def test_keyword_casing(self):
        formatted = self.formatter.format("select Col from Tab where Col between 1 and 2")
        for token in lexer.tokenize(formatted):
            if token.category == TokenCategory.keyword:
                self.assertEqual(token.text, token.text.upper())
        self.assertIn("Col", formatted)
        self.assertIn("Tab", formatted)

        formatted = TSqlFormatter(LocalConfig().set_keyword_case(KeywordCase.lowercase)) \
            .format("SELECT Col FROM Tab")
        self.assertEqual(formatted, "select Col\nfrom Tab")

    def test_idempotent(self):
        for sql in SAMPLES:
            once = self.formatter.format(sql)
            self.assertEqual(self.formatter.format(once), once)

    def test_empty_input(self):
        self.assertEqual(self.formatter.format(""), "")
        self.assertEqual(self.formatter.format(None), None)
        self.assertEqual(self.formatter.format(" \r\n "), " \r\n ")

    def test_balanced_depth(self):
        state = run(self.formatter,
                    "select * from (select case when a in (1, 2) then 1 end from t) x")
        self.assertEqual(state.nesting_level, 0)
        self.assertEqual(state.parenthesis_level, 0)
        self.assertEqual(state.case_level, 0)
        self.assertEqual(state.is_in_in_list, False)
        self.assertEqual(state.indent_level(), 0)

    def test_unbalanced_parentheses(self):
        self.assertEqual(run(self.formatter, "select ((( a").parenthesis_level, 3)
        self.assertEqual(run(self.formatter, "select a )))").parenthesis_level, 0)

    def test_open_contexts(self):
        state = run(self.formatter, "select * from (select case when")
        self.assertEqual(state.nesting_level, 1)
        self.assertEqual(state.is_in_subquery, True)
        self.assertEqual(state.case_level, 1)
        self.assertEqual(state.is_in_case_statement, True)
        self.assertEqual(state.indent_level(), 2)
        self.assertEqual(state.base_indent_level, 0)

        state = run(self.formatter, "select * from (select * from (select")
        self.assertEqual(state.base_indent_level, 1)
        state = run(self.formatter, "select * from (select * from (select 1) y")
        self.assertEqual(state.base_indent_level, 0)

        state = run(self.formatter, "select a from t where b in")
        self.assertEqual(state.is_in_in_list, True)
        self.assertEqual(state.pending_in_list, True)

        state = run(self.formatter, "select a from t where b in c")
        self.assertEqual(state.is_in_in_list, False)

        state = run(self.formatter, "with x as")
        self.assertEqual(state.is_in_cte, True)
        self.assertEqual(state.cte_level, 1)

        state = run(self.formatter, "where a between 1")
        self.assertEqual(state.is_in_between_statement, True)
        state = run(self.formatter, "where a between 1 and 2")
        self.assertEqual(state.is_in_between_statement, False)

        state = run(self.formatter, "select a, b")
        self.assertEqual(state.is_in_comma_list, False)
        state = run(self.formatter, "select * from (select a, b")
        self.assertEqual(state.is_in_comma_list, True)

    def test_last_tokens(self):
        state = run(self.formatter, "select a /* c */ ")
        self.assertEqual(state.last_token_category, TokenCategory.whitespace)
        self.assertEqual(state.last_significant_token, Token(TokenCategory.identifier, "a"))
        self.assertEqual(self.formatter.new_state().last_token_category, None)

    def test_reusable(self):
        first = self.formatter.format("select * from (select 1) x")
        self.formatter.format("select * from (select (((")
        self.assertEqual(self.formatter.format("select * from (select 1) x"), first)

    def test_format_tokens(self):
        tokens = [
            Token(TokenCategory.keyword, "select"),
            Token(TokenCategory.whitespace, " "),
            Token(TokenCategory.variable, "@a"),
            Token(TokenCategory.character, ","),
            Token(TokenCategory.system_variable, "@@rowcount"),
        ]
        self.assertEqual(self.formatter.format_tokens(tokens), "SELECT @a, @@rowcount")

    def test_cte(self):
        self.assertEqual(self.formatter.format("with x as (select 1 as a) select * from x"),
                         "WITH\n\tx\n\tAS\n\t(\n\t\tSELECT 1\n\t\tAS\n\t\ta\n\t)\n\tSELECT *\n\tFROM x")

    def test_alias_outside_cte(self):
        self.assertEqual(self.formatter.format("select a as b from t"),
                         "SELECT a AS b\nFROM t")

    def test_in_subquery(self):
        self.assertEqual(self.formatter.format("select a from t where b in (select c from u)"),
                         "SELECT a\nFROM t\nWHERE b IN\n(\n\t\tSELECT c\n\t\tFROM u\n)")

    def test_error_is_wrapped(self):
        broken = Token(TokenCategory.keyword, None)

        with self.assertRaises(SqlFormatterException) as cm:
            self.formatter.format_tokens([Token(TokenCategory.keyword, "select"), broken])

        self.assertIs(cm.exception.token, broken)
        self.assertIn("token:", str(cm.exception))


if __name__ == "__main__":
    #import sys;sys.argv = ['', 'Test.testName']
    unittest.main()
