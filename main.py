from rich.pretty import pprint

from optnaut import *

parser = OptionParser(
    usage="%prog [options] FILE...",
    version="%prog 0.1.0",
    description="Copy FILE entries to the output directory.",
    epilog="Report bugs to the issue tracker.",
    colorful=True,
)
parser.add_option("-o", "--output", dest="output", metavar="DIR", help="write results into DIR")
parser.add_option("-v", "--verbose", action="count", help="increase verbosity (repeatable)")
parser.add_option("--mode", choices=("copy", "link"), default="copy", help="transfer mode [default: %default]")

filters = parser.add_option_group("Filters", "Restrict which entries are processed.")
filters.add_option("-x", "--exclude", action="append", metavar="GLOB", help="skip entries matching GLOB")


if __name__ == '__main__':
    values, args = parser.parse_args()
    pprint(values)
    pprint(args)
