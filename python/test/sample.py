# coding:utf-8
'''
Prints a formatted sample statement.
'''

import tsqlfmt
from tsqlfmt.config import LocalConfig

def sample():
    sql = u"""
select column1 as c1, case when column2 = 1 then 'one' else 'other' end as c2 --columns
from foo_table --table
where column1 in ('sample', 'example')
and column3 between 1 and 10
and column4 in (select id from bar_table where flag = 1)
"""

    formatted = tsqlfmt.format_sql(sql, LocalConfig())

    print(formatted)

if __name__ == "__main__":
    sample()
