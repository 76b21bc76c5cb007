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

import gzip
import logging
from contextlib import contextmanager
from typing import IO, Iterator

import requests

from cpetools.errors import FeedError


DEFAULT_DICTIONARY_URL = 'https://nvd.nist.gov/feeds/xml/cpe/dictionary/official-cpe-dictionary_v2.3.xml.gz'

_USER_AGENT = 'cpetools/0 (+{}/docs/bots)'.format('https://repology.org')


@contextmanager
def open_feed(url: str, timeout: float = 60) -> Iterator[IO[bytes]]:
    logging.info(f'feed {url}: fetching')

    try:
        response = requests.get(url, stream=True, headers={'user-agent': _USER_AGENT}, timeout=timeout)
    except requests.RequestException as e:
        logging.error(f'feed {url}: request failed: {e}')
        raise FeedError(f'feed {url}: request failed') from e

    with response:
        if response.status_code != 200:
            logging.error(f'feed {url}: got bad HTTP code {response.status_code}')
            raise FeedError(f'feed {url}: got bad HTTP code {response.status_code}')

        response.raw.decode_content = True

        if url.endswith('.gz'):
            with gzip.open(response.raw) as decompressed:
                yield decompressed
        else:
            yield response.raw

    logging.info(f'feed {url}: done')
