#!/usr/bin/env python3
#
# Copyright (C) 2020 Dmitry Marakasov <amdmi3@amdmi3.ru>
#
# This file is part of repology
#
# repology is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# repology is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with repology.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import sys

from cpetools.convert import Converter, OUTPUT_FORMATS
from cpetools.errors import FeedError
from cpetools.feed import DEFAULT_DICTIONARY_URL


def main() -> int:
    config = {
        'FORMAT': 'uri',
        'DICTIONARY_URL': DEFAULT_DICTIONARY_URL,
        'TIMEOUT': 60,
    }

    parser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument('-d', '--debug', action='store_true', help='enable debug logging')
    parser.add_argument('-f', '--format', default=config['FORMAT'], choices=OUTPUT_FORMATS, help='output format')
    parser.add_argument('-i', '--input', metavar='FILE', help='read CPE URIs from file, one per line (- for stdin)')
    parser.add_argument('-u', '--dictionary-url', metavar='URL', nargs='?', const=config['DICTIONARY_URL'], help='convert all items of CPE dictionary feed (official NVD dictionary if URL is omitted)')
    parser.add_argument('-t', '--timeout', type=float, default=config['TIMEOUT'], help='HTTP timeout in seconds')
    parser.add_argument('cpes', metavar='CPE', nargs='*', help='CPE URIs to convert')

    args = parser.parse_args()

    logging.basicConfig(format='%(asctime)s %(levelname)-8s %(message)s', level=logging.DEBUG if args.debug else logging.INFO)

    try:
        return Converter(args).run()
    except FeedError as e:
        logging.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
