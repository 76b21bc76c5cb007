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

import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from cpetools.errors import CPEError, InvalidArgument, InvalidPartCode, MalformedInput, MissingField


class Part(Enum):
    HARDWARE = 'h'
    OPERATING_SYSTEM = 'o'
    APPLICATION = 'a'


class Format(Enum):
    URI = 'uri'
    WFN = 'wfn'
    FORMATTED = 'formatted'


_URI_PREFIX = re.compile('cpe:/[hoa]:')
_WHITESPACE = re.compile(r'\s')

# discard, part, vendor, product, version, update, edition, language
_URI_MAX_FIELDS = 8


@dataclass(frozen=True, eq=False)
class CPE:
    part: Optional[Part] = None
    vendor: str = ''
    product: str = ''
    version: Optional[str] = None
    update: Optional[str] = None
    edition: Optional[str] = None
    language: Optional[str] = None
    sw_edition: Optional[str] = None
    target_sw: Optional[str] = None
    target_hw: Optional[str] = None
    other: Optional[str] = None
    title: Optional[str] = None

    def __post_init__(self) -> None:
        if self.part is not None and not isinstance(self.part, Part):
            try:
                object.__setattr__(self, 'part', Part(self.part))
            except (ValueError, TypeError):
                raise InvalidPartCode(self.part) from None

        for name, getter in _TEXT_ATTRIBUTES:
            value = getter(self)
            if value is not None and not isinstance(value, str):
                raise InvalidArgument(f'{name} must be a string, got {type(value).__name__}')

        if not self.vendor:
            raise MissingField('vendor')
        if not self.product:
            raise MissingField('product')

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'CPE':
        if not isinstance(data, Mapping):
            raise InvalidArgument(f'CPE fields must be a mapping, got {type(data).__name__}')

        if unknown := set(data) - _FIELD_NAMES:
            raise InvalidArgument('unrecognized CPE fields: ' + ', '.join(sorted(map(str, unknown))))

        return CPE(**data)

    @staticmethod
    def build(data: Mapping[str, Any]) -> Union['CPE', CPEError]:
        """Like from_dict(), but return the validation error instead of raising it."""
        try:
            return CPE.from_dict(data)
        except CPEError as e:
            return e

    @staticmethod
    def parse(source: Any) -> 'CPE':
        """Parse URI binding from a string, bytes or a readable stream.

        Input is lowercased and stripped. Up to eight colon separated
        fields are recognized, anything past the language field stays in it.
        """
        data = source.read() if hasattr(source, 'read') else source

        if isinstance(data, bytes):
            try:
                data = data.decode('utf-8')
            except UnicodeDecodeError:
                raise MalformedInput(data) from None

        if not isinstance(data, str):
            raise InvalidArgument(f'cannot parse CPE from {type(data).__name__}')

        text = data.lower().strip()
        if not _URI_PREFIX.match(text) or _WHITESPACE.search(text):
            raise MalformedInput(data)

        _, part, *values = text.split(':', _URI_MAX_FIELDS - 1)
        values += [None] * (_URI_MAX_FIELDS - 2 - len(values))
        vendor, product, version, update, edition, language = values

        return CPE(
            part=part[1:],
            vendor=vendor,
            product=product,
            version=version,
            update=update,
            edition=edition,
            language=language,
        )

    def _iter_set_attributes(self) -> Iterable[Tuple[str, str]]:
        for name, getter in _OPTIONAL_ATTRIBUTES:
            if (value := getter(self)) is not None:
                yield name, value

    def generate(self, fmt: Union[Format, str] = Format.URI) -> str:
        try:
            fmt = Format(fmt)
        except (ValueError, TypeError):
            raise InvalidArgument(f'unsupported CPE format: {fmt!r}') from None

        part = self.part.value if self.part is not None else ''

        if fmt == Format.URI:
            # cpe:/a:microsoft:internet_explorer:8.0.6001:beta
            uri = ['cpe', '/' + part, self.vendor, self.product]
            uri.extend(value for _, value in self._iter_set_attributes())
            return ':'.join(uri).lower()

        if fmt == Format.WFN:
            # wfn:[part="a",vendor="microsoft",product="internet_explorer",version="8.0.6001",update="beta"]
            wfn = f'wfn:[part="{part}",vendor="{self.vendor}",product="{self.product}"'
            wfn += ''.join(f',{name}="{value}"' for name, value in self._iter_set_attributes())
            return wfn + ']'

        # cpe:2.3:a:microsoft:internet_explorer:8.0.6001:beta:*:*:*:*:*:*
        formatted = ['cpe', '2.3', part, self.vendor, self.product]
        for _, getter in _OPTIONAL_ATTRIBUTES:
            value = getter(self)
            formatted.append('*' if value is None else value)
        return ':'.join(formatted).lower()

    def to_uri(self) -> str:
        return self.generate(Format.URI)

    def to_wfn(self) -> str:
        return self.generate(Format.WFN)

    def to_formatted(self) -> str:
        return self.generate(Format.FORMATTED)

    def __str__(self) -> str:
        return self.to_uri()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, CPE):
            other = other.to_uri()
        elif not isinstance(other, str):
            raise InvalidArgument(f'cannot compare CPE with {type(other).__name__}')

        return self.to_uri() == other

    def __hash__(self) -> int:
        return hash(self.to_uri())


_OPTIONAL_ATTRIBUTES: Tuple[Tuple[str, Callable[[CPE], Optional[str]]], ...] = (
    ('version', lambda cpe: cpe.version),
    ('update', lambda cpe: cpe.update),
    ('edition', lambda cpe: cpe.edition),
    ('language', lambda cpe: cpe.language),
    ('sw_edition', lambda cpe: cpe.sw_edition),
    ('target_sw', lambda cpe: cpe.target_sw),
    ('target_hw', lambda cpe: cpe.target_hw),
    ('other', lambda cpe: cpe.other),
)

_TEXT_ATTRIBUTES: Tuple[Tuple[str, Callable[[CPE], Optional[str]]], ...] = (
    ('vendor', lambda cpe: cpe.vendor),
    ('product', lambda cpe: cpe.product),
    *_OPTIONAL_ATTRIBUTES,
    ('title', lambda cpe: cpe.title),
)

_FIELD_NAMES = frozenset(field.name for field in fields(CPE))
