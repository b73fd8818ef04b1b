# coding:utf-8
'''
Output buffer.
'''

_BLANKS = " \t"


class Output(object):
    """
        Append-only buffer that synthesizes spaces, line breaks and indentation
    """

    def __init__(self, local_config):
        self.local_config = local_config
        self._chunks = []

    def write(self, text):
        if text:
            self._chunks.append(text)
        return self

    def last_char(self):
        if not self._chunks:
            return ""
        return self._chunks[-1][-1]

    def at_line_start(self):
        return not self._chunks or self.last_char() in "\r\n"

    def space(self):
        """
            Writes one space unless the previous output already separates
        """
        last = self.last_char()
        if last and not last.isspace() and last not in "(.":
            self._chunks.append(" ")
        return self

    def newline(self, level):
        """
            Starts a new line indented to level. An empty current line is
            reused, so consecutive line breaks never leave blank lines.
        """
        self._rstrip()
        if not self.at_line_start():
            self._chunks.append("\n")
        return self.write(self.local_config.indent_string(level))

    def _rstrip(self):
        while self._chunks:
            stripped = self._chunks[-1].rstrip(_BLANKS)
            if stripped:
                self._chunks[-1] = stripped
                return
            self._chunks.pop()

    def getvalue(self):
        return "".join(self._chunks).strip()
