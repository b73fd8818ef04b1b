# coding:utf-8
'''
Formatter exceptions.
'''
import traceback


class SqlFormatterException(Exception):
    '''
        Unexpected failure while formatting a token
    '''

    def __init__(self, token, ex, trace):
        super(SqlFormatterException, self).__init__(str(ex))
        self.token = token
        self.e = ex
        self.trace = trace
        self.message = str(ex)

    def __str__(self, *args):
        return self.message \
                + "\ntoken:" + repr(self.token) \
                + "\ntrace:" + self.trace \
                + "\noriginal:" + repr(self.e)

    @staticmethod
    def wrap_try_except(fnc, token, *args):
        try:
            if args:
                return fnc(*args)
            else:
                return fnc(token)
        except Exception as ex:
            if not isinstance(ex, SqlFormatterException):
                raise SqlFormatterException(token, ex, traceback.format_exc()) from ex
            raise
