# coding:utf-8
'''
T-SQL formatter command line.
'''

import os
import traceback
import codecs
import sys
import logging
import argparse
import tsqlfmt
from tsqlfmt.exceptions import SqlFormatterException
from tsqlfmt.config import LocalConfig, KeywordCase

LOGGER = logging.getLogger(__name__)

ERROR_PREFIX = "formaterror_"

KEYWORD_CASES = {
    'upper': KeywordCase.uppercase,
    'lower': KeywordCase.lowercase,
    'unchanged': KeywordCase.unchanged,
}


def format_dir(indir, outdir, local_config):
    """
        Formats every .sql file under indir into outdir, keeping the
        relative paths
    """
    if indir.endswith("/") or indir.endswith("\\"):
        indir = indir[:-1]

    count = 0
    for file_name, full_path in find_all_sql_files(indir):
        if __format_to(full_path, outdir, file_name, local_config):
            count += 1
    return count


def format_file(infile, outdir, local_config):
    """
        Formats the SQL file infile into outdir
    """
    return __format_to(infile, outdir, os.path.basename(infile), local_config)


def preview_path(path, mode, local_config, out=None):
    """
        Writes the original and formatted text of each SQL file to out
    """
    if out is None:
        out = sys.stdout
    if mode == "directory":
        paths = [full_path for _, full_path in find_all_sql_files(path)]
    else:
        paths = [path]

    for full_path in paths:
        sql = __read(full_path)
        if sql is None:
            continue
        out_sql, _ = format_text(sql, local_config)
        out.write("===== %s =====\n" % full_path)
        out.write(sql.rstrip() + "\n")
        out.write("----- formatted -----\n")
        out.write(out_sql + "\n")


def format_text(sql, local_config):
    """
        Returns (text, ok). On failure the text is the original SQL followed
        by a comment describing the error.
    """
    try:
        return tsqlfmt.format_sql(sql, local_config), True
    except SqlFormatterException as ex:
        LOGGER.error("format error: %s", ex.message)
        LOGGER.debug("%s", ex)
        return sql + "\n/*" + str(ex) + "\n" + traceback.format_exc() + "\n*/", False


def find_all_sql_files(directory):
    for root, _, files in os.walk(directory):
        for file_name in sorted(files):
            if os.path.splitext(file_name)[1].lower() == ".sql":
                path = os.path.join(root, file_name)
                yield path[len(directory) + 1:], path


def __format_to(infile, outdir, file_name, local_config):
    sql = __read(infile)
    if sql is None:
        return False

    out_sql, ok = format_text(sql, local_config)
    if ok:
        out_path = os.path.join(outdir, file_name)
    else:
        head, tail = os.path.split(file_name)
        out_path = os.path.join(outdir, head, ERROR_PREFIX + tail)
    out_dir = os.path.dirname(out_path)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir)
    __write_file(out_path, out_sql)
    LOGGER.info("%s -> %s", infile, out_path)
    return ok


def __read(path):
    try:
        return __read_file(path)
    except (IOError, UnicodeDecodeError) as ex:
        LOGGER.error("cannot read %s: %s", path, ex)
        return None


def __read_file(path):
    with codecs.open(path, "r", "utf-8") as target_file:
        return target_file.read()


def __write_file(path, value):
    with codecs.open(path, "w", "utf-8") as target_file:
        target_file.write(value)


def _indent_size(value):
    size = int(value)
    if size <= 0:
        raise argparse.ArgumentTypeError("indent size must be positive: %s" % value)
    return size


def _parse_args(test_args=None):
    parser = argparse.ArgumentParser(description='T-SQL formatter', prog='tsqlfmt')

    parser.add_argument('-v', '--version', action='version',
                        version='%(prog)s ' + tsqlfmt.__version__)
    parser.add_argument('input_path', \
        action='store', \
        type=str, \
        help='input directory path or input file path', \
        )
    parser.add_argument('output_path', \
        action='store', \
        nargs='?', \
        default=None, \
        type=str, \
        help='output path for formatted file(s).', \
        )
    parser.add_argument('-m', '--mode', \
        action='store', \
        default='file', \
        type=str, \
        choices=['file', 'directory'], \
        help='format target. default "file"', \
        )
    parser.add_argument('-p', '--preview', \
        action='store_true', \
        help='print original and formatted SQL instead of writing files.', \
        )

    parser.add_argument('-s', '--spaces', \
        action='store_true', \
        help='indent with spaces instead of tabs.', \
        )
    parser.add_argument('-i', '--indent-size', \
        action='store', \
        default=4, \
        type=_indent_size, \
        help='spaces per indent level with --spaces. default 4', \
        )
    parser.add_argument('-c', '--keyword-case', \
        action='store', \
        default='upper', \
        type=str, \
        choices=sorted(KEYWORD_CASES), \
        help='keyword case. default "upper"', \
        )
    parser.add_argument('-N', '--nochange_case', \
        action='store_true', \
        help='leave keyword case as written.', \
        )
    parser.add_argument('--expand-comma-lists', \
        action='store_true', \
        help='break comma separated lists one item per line.', \
        )
    parser.add_argument('--no-expand-case', \
        action='store_true', \
        help='keep CASE expressions on one line.', \
        )
    parser.add_argument('--expand-between', \
        action='store_true', \
        help='break BETWEEN ... AND ... over lines.', \
        )
    parser.add_argument('--no-expand-in-lists', \
        action='store_true', \
        help='keep IN lists on one line.', \
        )

    parser.set_defaults(loglevel=logging.WARNING)
    parser.add_argument('-q', '--quiet', dest='loglevel', \
        action='store_const', \
        const=logging.ERROR, \
        help='produce less console output', \
        )
    parser.add_argument('--verbose', dest='loglevel', \
        action='store_const', \
        const=logging.DEBUG, \
        help='produce more console output', \
        )

    args = parser.parse_args(test_args)
    if args.output_path is None and not args.preview:
        parser.error("output_path is required unless --preview is given")
    return args


def build_config(args):
    """
        LocalConfig from parsed arguments
    """
    local_config = LocalConfig()
    local_config \
        .set_indent_use_tab(not args.spaces) \
        .set_indent_size(args.indent_size) \
        .set_keyword_case(KEYWORD_CASES[args.keyword_case]) \
        .set_expand_comma_lists(args.expand_comma_lists) \
        .set_expand_case_statements(not args.no_expand_case) \
        .set_expand_between_and_statements(args.expand_between) \
        .set_expand_in_lists(not args.no_expand_in_lists)
    if args.nochange_case:
        local_config.set_uppercase(False)
    return local_config


def _configure_logging(loglevel):
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter('%(message)s'))
    console.setLevel(loglevel)
    root = logging.getLogger()
    root.addHandler(console)
    root.setLevel(loglevel)
    return console


def main(test_args=None):
    args = _parse_args(test_args)
    console = _configure_logging(args.loglevel)
    try:
        return _execute(args)
    finally:
        logging.getLogger().removeHandler(console)


def _execute(args):
    local_config = build_config(args)

    if args.preview:
        preview_path(args.input_path, args.mode, local_config)
        return 0

    if args.mode == "file":
        failures = 0 if format_file(args.input_path, args.output_path, local_config) else 1
    else:
        before = sum(1 for _ in find_all_sql_files(args.input_path.rstrip("/\\")))
        failures = before - format_dir(args.input_path, args.output_path, local_config)

    LOGGER.info("Output directory path : %s", args.output_path)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
