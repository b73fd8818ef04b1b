# coding:utf-8
'''
Formatting engine.

A single pass over the token sequence. Nothing is parsed into a tree:
the open syntactic contexts (subquery, CASE, CTE, BETWEEN, IN list, comma
list) are tracked on a ContextStack and the indentation depth is derived
from it while the text is written.
'''
from tsqlfmt import lexer
from tsqlfmt import tokenutils as tu
from tsqlfmt.config import LocalConfig
from tsqlfmt.context import ContextKind, ContextStack
from tsqlfmt.exceptions import SqlFormatterException
from tsqlfmt.output import Output


class FormatterState(object):
    """
        Everything a formatting run mutates. One per run.
    """

    __slots__ = ('contexts', 'output', 'parenthesis_level', 'pending_in_list',
                 'from_parentheses', 'last_token', 'last_significant_token')

    def __init__(self, local_config):
        self.contexts = ContextStack(local_config)
        self.output = Output(local_config)
        self.parenthesis_level = 0
        self.pending_in_list = False # IN seen, its "(" not yet
        self.from_parentheses = [] # (parenthesis_level, depth) of each open "FROM ("
        self.last_token = None
        self.last_significant_token = None # last token that is not whitespace or a comment

    @property
    def last_token_category(self):
        if self.last_token is None:
            return None
        return self.last_token.category

    @property
    def nesting_level(self):
        return self.contexts.count(ContextKind.subquery)

    @property
    def is_in_subquery(self):
        return self.contexts.is_open(ContextKind.subquery)

    @property
    def base_indent_level(self):
        """
            Depth recorded at the innermost open "FROM (", 0 outside one
        """
        if not self.from_parentheses:
            return 0
        return self.from_parentheses[-1][1]

    @property
    def case_level(self):
        return self.contexts.count(ContextKind.case)

    @property
    def is_in_case_statement(self):
        return self.contexts.is_open(ContextKind.case)

    @property
    def cte_level(self):
        return self.contexts.count(ContextKind.cte)

    @property
    def is_in_cte(self):
        return self.contexts.is_open(ContextKind.cte)

    @property
    def is_in_between_statement(self):
        return self.contexts.is_open(ContextKind.between)

    @property
    def is_in_in_list(self):
        return self.pending_in_list or self.contexts.is_open(ContextKind.in_list)

    @property
    def is_in_comma_list(self):
        return self.contexts.is_open(ContextKind.comma_list)

    def indent_level(self):
        return self.contexts.depth()


class TSqlFormatter(object):
    """
        Formats SQL text or a token sequence.

        The instance only holds configuration; all run state lives in a
        FormatterState, so one instance can format any number of inputs.
    """

    def __init__(self, local_config=None):
        self.local_config = local_config if local_config is not None else LocalConfig()

    def format(self, sql):
        if not sql or sql.isspace():
            return sql
        return self.format_tokens(lexer.tokenize(sql))

    def format_tokens(self, tokens):
        state = self.new_state()
        for token in tokens:
            SqlFormatterException.wrap_try_except(self.process, token, state, token)
        return state.output.getvalue()

    def new_state(self):
        return FormatterState(self.local_config)

    def process(self, state, token):
        """
            Formats one token, updating state
        """
        significant = not (tu.is_whitespace(token) or tu.is_comment(token))
        if significant and state.pending_in_list and not tu.is_open_parenthesis(token):
            state.pending_in_list = False

        if tu.is_comment(token):
            self._process_comment(state, token)
        elif tu.is_keyword(token):
            self._process_keyword(state, token)
        elif tu.is_simple(token):
            state.output.space().write(token.text)
        elif tu.is_operator(token):
            self._process_operator(state, token)
        elif tu.is_character(token):
            self._process_character(state, token)
        elif tu.is_whitespace(token):
            self._process_whitespace(state, token)
        elif tu.is_incomplete(token):
            # passed through as they are
            state.output.space().write(token.text)

        if significant:
            state.last_significant_token = token
        state.last_token = token

    def _keyword(self, token):
        return self.local_config.format_keyword(token.text)

    def _process_keyword(self, state, token):
        output = state.output
        if tu.is_case_keyword(token):
            self._process_case_keyword(state, token)
        elif tu.is_between_keyword(token):
            self._process_between_keyword(state, token)
        elif tu.is_in_keyword(token):
            output.space().write(self._keyword(token))
            state.pending_in_list = True
        elif tu.is_cte_keyword(token):
            self._process_cte_keyword(state, token)
        elif tu.is_select_keyword(token) and state.parenthesis_level > 0:
            self._process_subquery_select(state, token)
        elif tu.is_from_keyword(token):
            output.newline(state.indent_level()).write(self._keyword(token)).write(" ")
        elif tu.is_where_keyword(token):
            output.newline(state.base_indent_level).write(self._keyword(token))
        elif tu.is_newline_keyword(token):
            output.newline(state.indent_level()).write(self._keyword(token))
        else:
            output.space().write(self._keyword(token))

    def _process_case_keyword(self, state, token):
        output = state.output
        keyword = self._keyword(token)

        if not self.local_config.expand_case_statements:
            output.space().write(keyword)
            return

        word = token.text.upper()
        if word == "CASE":
            state.contexts.open(ContextKind.case, state.parenthesis_level)
            output.space().write(keyword)
            output.newline(state.indent_level())
        elif word == "WHEN":
            output.newline(state.indent_level())
            output.write(keyword).write(" ")
        elif word == "THEN":
            output.space().write(keyword)
            output.newline(state.indent_level())
        elif word == "ELSE":
            output.newline(state.indent_level())
            output.write(keyword)
            output.newline(state.indent_level())
        else:
            state.contexts.close(ContextKind.case)
            output.newline(state.indent_level())
            output.write(keyword)

    def _process_between_keyword(self, state, token):
        output = state.output
        keyword = self._keyword(token)
        expand = self.local_config.expand_between_and_statements

        if tu.equals_ignore_case(token.text, "BETWEEN"):
            state.contexts.open(ContextKind.between, state.parenthesis_level)
            output.space().write(keyword)
            if expand:
                output.newline(state.indent_level())
        elif state.is_in_between_statement:
            if expand:
                output.newline(state.indent_level())
            else:
                output.space()
            output.write(keyword).write(" ")
            state.contexts.discard(ContextKind.between)
        else:
            # boolean AND
            output.space().write(keyword).write(" ")

    def _process_cte_keyword(self, state, token):
        output = state.output
        keyword = self._keyword(token)

        if not tu.is_as_keyword(token):
            state.contexts.open(ContextKind.cte, state.parenthesis_level)
            output.space().write(keyword)
            output.newline(state.indent_level())
        elif state.is_in_cte:
            output.newline(state.indent_level())
            output.write(keyword)
            output.newline(state.indent_level())
        else:
            # alias
            output.space().write(keyword).write(" ")

    def _process_subquery_select(self, state, token):
        current = state.contexts.innermost(ContextKind.subquery)
        if current is None or current.parenthesis_level != state.parenthesis_level:
            state.contexts.open(ContextKind.subquery, state.parenthesis_level)
        state.output.newline(state.indent_level()).write(self._keyword(token))

    def _process_operator(self, state, token):
        if tu.is_open_parenthesis(token):
            self._process_open_parenthesis(state, token)
        elif tu.is_close_parenthesis(token):
            self._process_close_parenthesis(state, token)
        else:
            state.output.space().write(token.text).write(" ")

    def _process_open_parenthesis(self, state, token):
        output = state.output
        state.parenthesis_level += 1

        if state.pending_in_list:
            state.pending_in_list = False
            if self.local_config.expand_in_lists:
                output.newline(state.indent_level()).write(token.text)
                state.contexts.open(ContextKind.in_list, state.parenthesis_level)
                output.newline(state.indent_level())
            else:
                output.space().write(token.text)
                state.contexts.open(ContextKind.in_list, state.parenthesis_level)
            return

        previous = state.last_significant_token
        if tu.is_keyword(previous) and not tu.is_function_keyword(previous):
            output.space()
        output.write(token.text)
        if tu.is_from_keyword(previous):
            state.from_parentheses.append((state.parenthesis_level, state.indent_level()))
            output.newline(state.indent_level())

    def _process_close_parenthesis(self, state, token):
        output = state.output
        if state.parenthesis_level > 0:
            closed = state.contexts.close_parenthesis(state.parenthesis_level)
            state.parenthesis_level -= 1
            while state.from_parentheses \
                    and state.from_parentheses[-1][0] > state.parenthesis_level:
                state.from_parentheses.pop()
            if closed and self._needs_line_before_close(closed):
                output.newline(closed[0].indent)
        output.write(token.text)

    def _needs_line_before_close(self, closed):
        if closed[0].kind == ContextKind.in_list and self.local_config.expand_in_lists:
            return True
        return any(context.kind == ContextKind.subquery for context in closed)

    def _process_character(self, state, token):
        output = state.output
        output.write(token.text)
        if not tu.is_comma(token):
            return

        contexts = state.contexts
        scope = contexts.innermost(ContextKind.in_list, ContextKind.subquery)
        if scope is not None and scope.kind == ContextKind.in_list:
            if self.local_config.expand_in_lists:
                output.newline(state.indent_level())
            else:
                output.write(" ")
        elif self.local_config.expand_comma_lists or state.is_in_subquery:
            if not contexts.is_open_in_scope(ContextKind.comma_list):
                contexts.open(ContextKind.comma_list, state.parenthesis_level)
            output.newline(state.indent_level())
        else:
            output.write(" ")

    def _process_comment(self, state, token):
        output = state.output
        output.space().write(token.text)
        if tu.is_line_comment(token):
            # keep the rest of the line out of the comment
            output.newline(state.indent_level())

    def _process_whitespace(self, state, token):
        if tu.is_newline_whitespace(token):
            state.output.newline(state.indent_level())
