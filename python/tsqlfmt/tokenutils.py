# coding:utf-8
'''
Token model and token predicates.
'''
import collections
from enum import Enum


class TokenCategory(Enum):
    """
        Token categories produced by the lexer
    """
    keyword = 0
    identifier = 1
    system_identifier = 2
    string_literal = 3
    numeric_literal = 4
    money_literal = 5
    binary_literal = 6
    operator = 7
    character = 8 # punctuation such as , . ;
    variable = 9
    system_variable = 10
    system_column_identifier = 11
    whitespace = 12
    single_line_comment = 13
    multiline_comment = 14
    incomplete_comment = 15
    incomplete_identifier = 16
    incomplete_string = 17


Token = collections.namedtuple("Token", ("category", "text"))


# T-SQL reserved keywords. Words outside this set are identifiers.
RESERVED_KEYWORDS = frozenset([
    "ADD", "ALL", "ALTER", "AND", "ANY", "AS", "ASC", "AUTHORIZATION",
    "BACKUP", "BEGIN", "BETWEEN", "BREAK", "BROWSE", "BULK", "BY",
    "CASCADE", "CASE", "CHECK", "CHECKPOINT", "CLOSE", "CLUSTERED",
    "COALESCE", "COLLATE", "COLUMN", "COMMIT", "COMPUTE", "CONSTRAINT",
    "CONTAINS", "CONTAINSTABLE", "CONTINUE", "CONVERT", "CREATE", "CROSS",
    "CURRENT", "CURRENT_DATE", "CURRENT_TIME", "CURRENT_TIMESTAMP",
    "CURRENT_USER", "CURSOR", "DATABASE", "DBCC", "DEALLOCATE", "DECLARE",
    "DEFAULT", "DELETE", "DENY", "DESC", "DISK", "DISTINCT", "DISTRIBUTED",
    "DOUBLE", "DROP", "DUMP", "ELSE", "END", "ERRLVL", "ESCAPE", "EXCEPT",
    "EXEC", "EXECUTE", "EXISTS", "EXIT", "EXTERNAL", "FETCH", "FILE",
    "FILLFACTOR", "FOR", "FOREIGN", "FREETEXT", "FREETEXTTABLE", "FROM",
    "FULL", "FUNCTION", "GOTO", "GRANT", "GROUP", "HAVING", "HOLDLOCK",
    "IDENTITY", "IDENTITY_INSERT", "IDENTITYCOL", "IF", "IN", "INDEX",
    "INNER", "INSERT", "INTERSECT", "INTO", "IS", "JOIN", "KEY", "KILL",
    "LEFT", "LIKE", "LINENO", "LOAD", "MERGE", "NATIONAL", "NOCHECK",
    "NONCLUSTERED", "NOT", "NULL", "NULLIF", "OF", "OFF", "OFFSETS", "ON",
    "OPEN", "OPENDATASOURCE", "OPENQUERY", "OPENROWSET", "OPENXML",
    "OPTION", "OR", "ORDER", "OUTER", "OVER", "PERCENT", "PIVOT", "PLAN",
    "PRECISION", "PRIMARY", "PRINT", "PROC", "PROCEDURE", "PUBLIC",
    "RAISERROR", "READ", "READTEXT", "RECONFIGURE", "REFERENCES",
    "REPLICATION", "RESTORE", "RESTRICT", "RETURN", "REVERT", "REVOKE",
    "RIGHT", "ROLLBACK", "ROWCOUNT", "ROWGUIDCOL", "RULE", "SAVE", "SCHEMA",
    "SECURITYAUDIT", "SELECT", "SEMANTICKEYPHRASETABLE",
    "SEMANTICSIMILARITYDETAILSTABLE", "SEMANTICSIMILARITYTABLE",
    "SESSION_USER", "SET", "SETUSER", "SHUTDOWN", "SOME", "STATISTICS",
    "SYSTEM_USER", "TABLE", "TABLESAMPLE", "TEXTSIZE", "THEN", "TO", "TOP",
    "TRAN", "TRANSACTION", "TRIGGER", "TRUNCATE", "TRY_CONVERT", "TSEQUAL",
    "UNION", "UNIQUE", "UNPIVOT", "UPDATE", "UPDATETEXT", "USE", "USER",
    "VALUES", "VARYING", "VIEW", "WAITFOR", "WHEN", "WHERE", "WHILE",
    "WITH", "WITHIN", "WRITETEXT",
])

CASE_KEYWORDS = ("CASE", "WHEN", "THEN", "ELSE", "END")

BETWEEN_KEYWORDS = ("BETWEEN", "AND")

CTE_KEYWORDS = ("WITH", "AS")

NEWLINE_KEYWORDS = (
    "SELECT", "FROM", "WHERE", "GROUP", "ORDER", "HAVING",
    "JOIN", "LEFT", "RIGHT", "INNER", "OUTER", "CROSS",
    "UNION", "INTERSECT", "EXCEPT", "WITH", "INSERT", "UPDATE",
    "DELETE", "MERGE", "VALUES", "SET", "INTO", "ON", "AND", "OR",
)

# reserved words that are called like functions: NULLIF(a, b)
FUNCTION_KEYWORDS = (
    "COALESCE", "CONVERT", "TRY_CONVERT", "NULLIF", "IDENTITY",
    "CONTAINS", "CONTAINSTABLE", "FREETEXT", "FREETEXTTABLE",
    "OPENDATASOURCE", "OPENQUERY", "OPENROWSET", "OPENXML",
)

_SIMPLE_CATEGORIES = frozenset([
    TokenCategory.identifier,
    TokenCategory.system_identifier,
    TokenCategory.string_literal,
    TokenCategory.numeric_literal,
    TokenCategory.money_literal,
    TokenCategory.binary_literal,
    TokenCategory.variable,
    TokenCategory.system_variable,
    TokenCategory.system_column_identifier,
])

_INCOMPLETE_CATEGORIES = frozenset([
    TokenCategory.incomplete_comment,
    TokenCategory.incomplete_identifier,
    TokenCategory.incomplete_string,
])


def is_reserved_keyword(word):
    """
        Check for a T-SQL reserved keyword
    """
    return word.upper() in RESERVED_KEYWORDS

def is_keyword(token, value=None):
    """
        Check for a keyword. With value, also compares the text ignoring case.
    """
    if token is None or token.category != TokenCategory.keyword:
        return False
    if value is None:
        return True
    return equals_ignore_case(token.text, value)

def is_whitespace(token):
    """
        Check for whitespace
    """
    return token is not None and token.category == TokenCategory.whitespace

def is_newline_whitespace(token):
    """
        Check for whitespace containing a line break
    """
    return is_whitespace(token) and ("\n" in token.text or "\r" in token.text)

def is_comment(token):
    """
        Check for a comment
    """
    return token is not None and token.category in (
        TokenCategory.single_line_comment, TokenCategory.multiline_comment)

def is_line_comment(token):
    """
        Check for a line comment
    """
    return token is not None and token.category == TokenCategory.single_line_comment

def is_incomplete(token):
    """
        Unterminated comment, identifier or string
    """
    return token is not None and token.category in _INCOMPLETE_CATEGORIES

def is_simple(token):
    """
        Identifiers, literals and variables: rendered as-is with a separating space
    """
    return token is not None and token.category in _SIMPLE_CATEGORIES

def is_operator(token):
    return token is not None and token.category == TokenCategory.operator

def is_character(token):
    return token is not None and token.category == TokenCategory.character

def is_open_parenthesis(token):
    """
        Check for an opening parenthesis
    """
    return is_operator(token) and token.text == "("

def is_close_parenthesis(token):
    """
        Check for a closing parenthesis
    """
    return is_operator(token) and token.text == ")"

def is_comma(token):
    """
        Check for a comma
    """
    return is_character(token) and token.text == ","

def is_case_keyword(token):
    """
        Check for CASE, WHEN, THEN, ELSE or END
    """
    return is_keyword(token, CASE_KEYWORDS)

def is_between_keyword(token):
    """
        Check for BETWEEN or AND
    """
    return is_keyword(token, BETWEEN_KEYWORDS)

def is_in_keyword(token):
    """
        Check for IN
    """
    return is_keyword(token, "IN")

def is_cte_keyword(token):
    """
        Check for WITH or AS
    """
    return is_keyword(token, CTE_KEYWORDS)

def is_select_keyword(token):
    return is_keyword(token, "SELECT")

def is_from_keyword(token):
    """
        Check for FROM
    """
    return is_keyword(token, "FROM")

def is_as_keyword(token):
    """
        Check for AS
    """
    return is_keyword(token, "AS")

def is_where_keyword(token):
    return is_keyword(token, "WHERE")

def is_function_keyword(token):
    """
        Reserved words written directly before their argument list
    """
    return is_keyword(token, FUNCTION_KEYWORDS)

def is_newline_keyword(token):
    """
        Keywords that always start a new line
    """
    return is_keyword(token, NEWLINE_KEYWORDS)

def equals_ignore_case(txt1, txt2):
    """
        Case-insensitive string comparison against one value or any of several
    """
    if isinstance(txt2, str):
        return txt1.upper() == txt2.upper()

    upper = txt1.upper()
    for value in txt2:
        if upper == value.upper():
            return True
    return False

