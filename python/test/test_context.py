# coding:utf-8
'''
Context stack.
'''

import unittest
from tsqlfmt.config import LocalConfig
from tsqlfmt.context import ContextKind as K, ContextStack


class Test(unittest.TestCase):

    def setUp(self):
        self.contexts = ContextStack(LocalConfig())

    def test_depth_is_weighted(self):
        contexts = self.contexts
        contexts.open(K.subquery, 1)
        contexts.open(K.case, 1)
        contexts.open(K.between, 1)
        self.assertEqual(contexts.depth(), 2)
        contexts.open(K.in_list, 2)
        self.assertEqual(contexts.depth(), 3)
        contexts.open(K.comma_list, 2)
        self.assertEqual(contexts.depth(), 3)

    def test_weights_follow_options(self):
        contexts = ContextStack(LocalConfig().set_expand_in_lists(False).set_expand_comma_lists(True))
        contexts.open(K.in_list, 1)
        self.assertEqual(contexts.depth(), 0)
        contexts.open(K.comma_list, 1)
        self.assertEqual(contexts.depth(), 1)

    def test_open_records_indent(self):
        contexts = self.contexts
        self.assertEqual(contexts.open(K.subquery, 1).indent, 0)
        self.assertEqual(contexts.open(K.case, 1).indent, 1)

    def test_close_pops_nested(self):
        contexts = self.contexts
        contexts.open(K.case)
        contexts.open(K.between)
        contexts.open(K.case)
        closed = contexts.close(K.case)
        self.assertEqual(closed.kind, K.case)
        self.assertEqual(contexts.count(K.case), 1)
        self.assertEqual(contexts.is_open(K.between), True)
        contexts.close(K.case)
        self.assertEqual(contexts.is_open(K.between), False)
        self.assertEqual(contexts.depth(), 0)
        self.assertEqual(contexts.close(K.case), None)

    def test_discard_keeps_others(self):
        contexts = self.contexts
        contexts.open(K.between)
        contexts.open(K.case)
        contexts.discard(K.between)
        self.assertEqual(contexts.is_open(K.between), False)
        self.assertEqual(contexts.count(K.case), 1)
        self.assertEqual(contexts.discard(K.between), None)

    def test_close_parenthesis(self):
        contexts = self.contexts
        contexts.open(K.subquery, 1)
        contexts.open(K.case, 1)
        contexts.open(K.subquery, 2)
        contexts.open(K.comma_list, 2)

        closed = contexts.close_parenthesis(2)
        self.assertEqual([context.kind for context in closed], [K.subquery, K.comma_list])
        self.assertEqual(contexts.depth(), 2)

        self.assertEqual(contexts.close_parenthesis(3), [])

        closed = contexts.close_parenthesis(1)
        self.assertEqual([context.kind for context in closed], [K.subquery, K.case])
        self.assertEqual(contexts.depth(), 0)

    def test_queries(self):
        contexts = self.contexts
        self.assertEqual(contexts.innermost(K.case), None)
        contexts.open(K.comma_list)
        contexts.open(K.subquery, 1)
        self.assertEqual(contexts.is_open(K.comma_list), True)
        self.assertEqual(contexts.is_open_in_scope(K.comma_list), False)
        contexts.open(K.comma_list, 1)
        self.assertEqual(contexts.is_open_in_scope(K.comma_list), True)
        self.assertEqual(contexts.count(K.comma_list), 2)
        self.assertEqual(contexts.innermost(K.subquery, K.in_list).kind, K.subquery)


if __name__ == "__main__":
    #import sys;sys.argv = ['', 'Test.testName']
    unittest.main()
