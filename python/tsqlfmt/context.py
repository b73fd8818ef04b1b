# coding:utf-8
'''
Syntactic contexts open while formatting.

Contexts live on one ordered stack. The indentation depth is the weighted
length of that stack, so every context that is open contributes and every
close undoes exactly what the matching open added.
'''
from enum import Enum


class ContextKind(Enum):
    """
        Kinds of syntactic region
    """
    subquery = 0
    case = 1
    cte = 2
    in_list = 3
    comma_list = 4
    between = 5


# contexts tied to a parenthesis, closed by the matching ")"
PARENTHESIS_KINDS = (ContextKind.subquery, ContextKind.in_list)


class Context(object):
    """
        One open context.

        parenthesis_level is the parenthesis depth the context belongs to,
        indent the depth in effect just before it opened.
    """

    __slots__ = ('kind', 'parenthesis_level', 'indent')

    def __init__(self, kind, parenthesis_level=0, indent=0):
        self.kind = kind
        self.parenthesis_level = parenthesis_level
        self.indent = indent

    def weight(self, local_config):
        if self.kind == ContextKind.between:
            return 0
        if self.kind == ContextKind.in_list:
            return 1 if local_config.expand_in_lists else 0
        if self.kind == ContextKind.comma_list:
            return 1 if local_config.expand_comma_lists else 0
        return 1

    def __repr__(self):
        return "Context(%s, %d, %d)" % (self.kind.name, self.parenthesis_level, self.indent)


class ContextStack(object):

    def __init__(self, local_config):
        self.local_config = local_config
        self._contexts = []

    def open(self, kind, parenthesis_level=0):
        context = Context(kind, parenthesis_level, self.depth())
        self._contexts.append(context)
        return context

    def innermost(self, *kinds):
        for context in reversed(self._contexts):
            if context.kind in kinds:
                return context
        return None

    def is_open(self, kind):
        return self.innermost(kind) is not None

    def is_open_in_scope(self, kind):
        """
            Open above the innermost subquery, i.e. in the current query
        """
        for context in reversed(self._contexts):
            if context.kind == kind:
                return True
            if context.kind == ContextKind.subquery:
                return False
        return False

    def count(self, kind):
        return sum(1 for context in self._contexts if context.kind == kind)

    def close(self, kind):
        """
            Pops the innermost context of kind together with everything
            opened after it. Returns it, or None if none is open.
        """
        for index in range(len(self._contexts) - 1, -1, -1):
            if self._contexts[index].kind == kind:
                context = self._contexts[index]
                del self._contexts[index:]
                return context
        return None

    def discard(self, kind):
        """
            Removes only the innermost context of kind
        """
        for index in range(len(self._contexts) - 1, -1, -1):
            if self._contexts[index].kind == kind:
                return self._contexts.pop(index)
        return None

    def close_parenthesis(self, parenthesis_level):
        """
            Closes the outermost context opened at or inside
            parenthesis_level, along with everything after it.
            Returns the closed contexts, outermost first.
        """
        for index, context in enumerate(self._contexts):
            if context.kind in PARENTHESIS_KINDS \
                    and context.parenthesis_level >= parenthesis_level:
                closed = self._contexts[index:]
                del self._contexts[index:]
                return closed
        return []

    def depth(self):
        return sum(context.weight(self.local_config) for context in self._contexts)
