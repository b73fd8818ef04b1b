# coding:utf-8
'''
Formatting options.
'''
from enum import Enum


class KeywordCase(Enum):
    """
        Casing applied to keywords
    """
    uppercase = 0
    lowercase = 1
    unchanged = 2


class LocalConfig(object):

    __slots__ = ('indent_size', 'indent_use_tab', 'keyword_case',
                 'expand_comma_lists', 'expand_case_statements',
                 'expand_between_and_statements', 'expand_in_lists')

    def __init__(self):
        self.indent_size = 4 # spaces per level when not using tabs
        self.indent_use_tab = True
        self.keyword_case = KeywordCase.uppercase
        self.expand_comma_lists = False
        self.expand_case_statements = True
        self.expand_between_and_statements = False
        self.expand_in_lists = True

    def set_indent_size(self, indent_size):
        self.indent_size = indent_size
        return self

    def set_indent_use_tab(self, indent_use_tab):
        self.indent_use_tab = indent_use_tab
        return self

    def set_keyword_case(self, keyword_case):
        self.keyword_case = keyword_case
        return self

    def set_uppercase(self, uppercase):
        """
            True for uppercase keywords, False to leave them as written
        """
        self.keyword_case = KeywordCase.uppercase if uppercase else KeywordCase.unchanged
        return self

    def set_expand_comma_lists(self, expand):
        self.expand_comma_lists = expand
        return self

    def set_expand_case_statements(self, expand):
        self.expand_case_statements = expand
        return self

    def set_expand_between_and_statements(self, expand):
        self.expand_between_and_statements = expand
        return self

    def set_expand_in_lists(self, expand):
        self.expand_in_lists = expand
        return self

    def indent_string(self, level):
        """
            Indentation for the given depth
        """
        if level <= 0:
            return ""
        if self.indent_use_tab:
            return "\t" * level
        return " " * (level * self.indent_size)

    def format_keyword(self, text):
        if self.keyword_case == KeywordCase.uppercase:
            return text.upper()
        if self.keyword_case == KeywordCase.lowercase:
            return text.lower()
        return text
