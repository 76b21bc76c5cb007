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

import xml.etree.ElementTree as ElementTree
from dataclasses import dataclass
from typing import IO, Iterable, Optional

from cpetools.cpe import CPE


_DICT_NS = 'http://cpe.mitre.org/dictionary/2.0'
_CPE23_NS = 'http://scap.nist.gov/schema/cpe-extension/2.3'
_XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'

_DEFAULT_LANG = 'en-US'


@dataclass
class CpeDictItem:
    name: str
    title: Optional[str] = None


def _extract_title(elem: ElementTree.Element) -> Optional[str]:
    titles = elem.findall(f'{{{_DICT_NS}}}title')

    if not titles:
        return None

    for title in titles:
        if title.attrib.get(_XML_LANG, _DEFAULT_LANG) == _DEFAULT_LANG:
            return title.text

    return titles[0].text


def iter_cpe_dict(source: IO[bytes]) -> Iterable[CpeDictItem]:
    nestlevel = 0
    rootelem = None
    for event, elem in ElementTree.iterparse(source, events=['start', 'end']):
        if event == 'start':
            if rootelem is None:
                rootelem = elem
            nestlevel += 1
        elif event == 'end':
            nestlevel -= 1
            if nestlevel == 1:
                if elem.tag == f'{{{_DICT_NS}}}cpe-item' and elem.attrib.get('deprecated') != 'true':
                    # nameless items are passed on and rejected by the CPE parser
                    yield CpeDictItem(elem.attrib.get('name', ''), _extract_title(elem))
                if rootelem is not None:
                    rootelem.clear()


def make_cpe_item(cpe: CPE) -> ElementTree.Element:
    item = ElementTree.Element('cpe-item', name=cpe.to_uri())

    if cpe.title is not None:
        title = ElementTree.SubElement(item, 'title', {'xml:lang': cpe.language or _DEFAULT_LANG})
        title.text = cpe.title

    ElementTree.SubElement(item, 'cpe-23:cpe23-item', name=cpe.to_formatted())

    return item


def write_cpe_dict(cpes: Iterable[CPE], stream: IO[bytes]) -> None:
    root = ElementTree.Element('cpe-list', {'xmlns': _DICT_NS, 'xmlns:cpe-23': _CPE23_NS})

    for cpe in cpes:
        root.append(make_cpe_item(cpe))

    ElementTree.ElementTree(root).write(stream, encoding='utf-8', xml_declaration=True)
