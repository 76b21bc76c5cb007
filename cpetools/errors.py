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

from typing import Any, Union


class CPEError(Exception):
    pass


class InvalidArgument(CPEError, TypeError):
    pass


class InvalidPartCode(InvalidArgument, ValueError):
    part: Any

    def __init__(self, part: Any) -> None:
        super().__init__(f"part must be 'a', 'h', or 'o', got {part!r}")
        self.part = part


class MissingField(CPEError, ValueError):
    field: str

    def __init__(self, field: str) -> None:
        super().__init__(f'{field} must be set')
        self.field = field


class MalformedInput(CPEError, ValueError):
    text: Union[str, bytes, None]

    def __init__(self, text: Union[str, bytes, None]) -> None:
        super().__init__(f'CPE malformed: {text!r}')
        self.text = text


class FeedError(CPEError, RuntimeError):
    pass
