# coding:utf-8
'''
Token source.

Runs the sqlparse lexer and maps its token types onto TokenCategory. The
resulting tokens cover the input without gaps: joining their texts gives
back the original SQL.
'''
import logging
import re
from sqlparse import lexer, tokens as T
from tsqlfmt import tokenutils as tu
from tsqlfmt.tokenutils import Token, TokenCategory as C

LOGGER = logging.getLogger(__name__)

_WORD = re.compile(r"\w+$", re.UNICODE)
_SPACES = re.compile(r"(\s+)", re.UNICODE)
_LETTER = re.compile(r"[^\W\d_]", re.UNICODE)
_MONEY = re.compile(r"\$\d+$")
_LINE_END = re.compile(r"(\r\n|\r|\n)$")


def tokenize(sql):
    """
        Yields the Tokens of sql
    """
    merged = []
    for token in _base_tokens(sql):
        if merged:
            joined = _merge_pair(merged[-1], token)
            if joined is not None:
                merged[-1] = joined
                continue
        merged.append(token)

    for token in merged:
        yield token


def _base_tokens(sql):
    offset = 0
    for ttype, value in lexer.tokenize(sql):
        rest = sql[offset:]
        category = _incomplete_category(ttype, value, rest)
        if category is not None:
            LOGGER.debug("%s at offset %d, passing the rest through", category.name, offset)
            yield Token(category, rest)
            return
        for token in _categorize(ttype, value):
            yield token
        offset += len(value)


def _incomplete_category(ttype, value, rest):
    """
        Unterminated string, quoted identifier or block comment
    """
    if value == "[" and "]" not in rest:
        return C.incomplete_identifier
    if ttype in T.Error:
        if value == "'":
            return C.incomplete_string
        if value == '"':
            return C.incomplete_identifier
    elif ttype in T.Operator:
        # sqlparse only falls back to "/" when no "*/" follows
        if rest.startswith("/*"):
            return C.incomplete_comment
    return None


def _categorize(ttype, value):
    # pylint: disable=too-many-return-statements
    if ttype in T.Comment.Single:
        return _line_comment(value)
    if ttype in T.Comment:
        return [Token(C.multiline_comment, value)]
    if ttype in T.Whitespace:
        return [Token(C.whitespace, value)]
    if ttype in T.Literal.String.Single:
        return [Token(C.string_literal, value)]
    if ttype in T.Literal.String.Symbol:
        return [Token(C.identifier, value)]
    if ttype in T.Literal.Number.Hexadecimal:
        return [Token(C.binary_literal, value)]
    if ttype in T.Literal.Number:
        return [Token(C.numeric_literal, value)]
    if ttype in T.Literal:
        return [Token(C.string_literal, value)]
    if ttype in T.Name.Placeholder:
        return [Token(_placeholder_category(value), value)]
    if ttype in T.Name and value.startswith("@@"):
        return [Token(C.system_variable, value)]
    if ttype in T.Name and value.startswith("@"):
        return [Token(C.variable, value)]
    if value.startswith("[") and value.endswith("]") and len(value) > 1:
        # [quoted identifier], spaces included
        return [Token(C.identifier, value)]
    if ttype in T.Wildcard:
        return [Token(C.identifier, value)]
    if ttype in T.Punctuation:
        if value in ("(", ")"):
            return [Token(C.operator, value)]
        return [Token(C.character, value)]
    if ttype in T.Keyword or ttype in T.Name:
        return _words(ttype, value)
    if ttype in T.Operator:
        if _LETTER.search(value):
            # LIKE, NOT LIKE, REGEXP ...
            return _words(ttype, value)
        return [Token(C.operator, value)]
    if ttype in T.Assignment:
        return [Token(C.operator, value)]
    return [Token(C.character, value)]


def _line_comment(value):
    """
        Separates a line comment from the line break sqlparse includes in it
    """
    match = _LINE_END.search(value)
    if not match:
        return [Token(C.single_line_comment, value)]
    return [
        Token(C.single_line_comment, value[:match.start()]),
        Token(C.whitespace, match.group()),
    ]


def _placeholder_category(value):
    if _MONEY.match(value):
        return C.money_literal
    if value.startswith("$"):
        # $action, $identity, $rowguid
        return C.system_column_identifier
    return C.variable


def _words(ttype, value):
    """
        Splits multi-word sqlparse tokens (GROUP BY, LEFT OUTER JOIN ...)
        into one token per word
    """
    result = []
    for piece in _SPACES.split(value):
        if not piece:
            continue
        if piece.isspace():
            result.append(Token(C.whitespace, piece))
        elif _WORD.match(piece):
            result.append(Token(_word_category(ttype, piece), piece))
        elif piece.startswith("'"):
            result.append(Token(C.string_literal, piece))
        elif ttype in T.Operator:
            result.append(Token(C.operator, piece))
        else:
            result.append(Token(C.identifier, piece))
    return result


def _word_category(ttype, word):
    if tu.is_reserved_keyword(word):
        return C.keyword
    if ttype in T.Name.Builtin:
        return C.system_identifier
    return C.identifier


def _merge_pair(prev, token):
    """
        Joins two adjacent tokens that form one T-SQL token, else None
    """
    if prev.category == C.whitespace and token.category == C.whitespace:
        return Token(C.whitespace, prev.text + token.text)
    if prev.category == C.operator and prev.text in ("@", "@@") \
            and _WORD.match(token.text) and token.category in (
                C.identifier, C.keyword, C.system_identifier):
        category = C.system_variable if prev.text == "@@" else C.variable
        return Token(category, prev.text + token.text)
    if prev.category == C.operator and prev.text == "@" \
            and token.category == C.variable \
            and token.text.startswith("@") and not token.text.startswith("@@"):
        return Token(C.system_variable, prev.text + token.text)
    if prev.category == C.identifier and prev.text in ("N", "n") \
            and token.category == C.string_literal:
        # N'unicode'
        return Token(C.string_literal, prev.text + token.text)
    if prev.category == C.money_literal and "." not in prev.text \
            and token.category == C.numeric_literal and token.text.startswith("."):
        return Token(C.money_literal, prev.text + token.text)
    return None
