# coding:utf-8
'''
T-SQL formatter.
'''


__version__ = '0.1.0'

from tsqlfmt import config
from tsqlfmt.formatter import TSqlFormatter


def format_sql(sql, local_config=None):
    """
        Formats sql. Empty or whitespace-only input is returned unchanged.
    """
    if local_config is None:
        local_config = config.LocalConfig()
    return TSqlFormatter(local_config).format(sql)
