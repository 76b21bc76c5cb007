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
from dataclasses import replace
from typing import IO, Iterable, Optional, Tuple

from cpetools.cpe import CPE, Format
from cpetools.dictionary import iter_cpe_dict, write_cpe_dict
from cpetools.errors import CPEError
from cpetools.feed import open_feed


OUTPUT_FORMATS = [fmt.value for fmt in Format] + ['xml']


def _iter_lines(stream: IO[str]) -> Iterable[str]:
    for line in stream:
        line = line.strip()
        if line and not line.startswith('#'):
            yield line


class Converter:
    _options: argparse.Namespace
    _output: IO[bytes]

    _num_converted: int = 0
    _num_errors: int = 0

    def __init__(self, options: argparse.Namespace, output: Optional[IO[bytes]] = None) -> None:
        self._options = options
        self._output = output if output is not None else sys.stdout.buffer

    def _iter_entries(self) -> Iterable[Tuple[str, Optional[str]]]:
        for cpe_str in self._options.cpes:
            yield cpe_str, None

        if self._options.input == '-' or not (self._options.cpes or self._options.input or self._options.dictionary_url):
            logging.debug('reading CPEs from stdin')
            for line in _iter_lines(sys.stdin):
                yield line, None
        elif self._options.input:
            logging.debug(f'reading CPEs from {self._options.input}')
            with open(self._options.input, 'r') as input_file:
                for line in _iter_lines(input_file):
                    yield line, None

        if self._options.dictionary_url:
            with open_feed(self._options.dictionary_url, self._options.timeout) as feed:
                for item in iter_cpe_dict(feed):
                    yield item.name, item.title

    def _iter_cpes(self) -> Iterable[CPE]:
        for cpe_str, title in self._iter_entries():
            try:
                cpe = CPE.parse(cpe_str)
            except CPEError as e:
                logging.warning(f'skipping {cpe_str!r}: {e}')
                self._num_errors += 1
                continue

            self._num_converted += 1
            yield cpe if title is None else replace(cpe, title=title)

    def run(self) -> int:
        if self._options.format == 'xml':
            write_cpe_dict(self._iter_cpes(), self._output)
            self._output.write(b'\n')
        else:
            for cpe in self._iter_cpes():
                self._output.write(cpe.generate(self._options.format).encode('utf-8') + b'\n')

        self._output.flush()

        logging.info(f'{self._num_converted} CPE(s) converted, {self._num_errors} error(s)')

        return 1 if self._num_errors else 0
