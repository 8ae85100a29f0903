"""HTML table extraction and header-driven field mapping."""

from typing import Callable, Dict, List, Optional, Sequence

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from ..utils.records import MISSING, RawTable


def _escape_text(value: str) -> str:
    return EntitySubstitution.substitute_xml(value).replace("\xa0", "&nbsp;")


# Serialize cell contents the way an HTML5 serializer does: "&", "<", ">" and
# U+00A0 are escaped, void tags render as "<br>".
INNER_HTML = HTMLFormatter(
    entity_substitution=_escape_text,
    void_element_close_prefix=None
)


def _inner_html(cell: Tag) -> str:
    return cell.decode_contents(formatter=INNER_HTML).strip()


def extract_table(http_data: str) -> RawTable:
    """
    Return the headers and rows of the first table in an HTML document.

    The first <tr> of the table supplies the headers (its <th> cells), every
    following <tr> is a row of <td> cells. Cell values are the trimmed inner
    markup of the cell.

    Parsing follows the HTML5 algorithm, so a stray "</br>" in a header
    becomes a "<br>" element and an unescaped "&" reads back as "&amp;".

    Args:
        http_data: Raw HTML text, possibly empty

    Returns:
        RawTable: Empty when the document holds no table
    """
    if not http_data:
        return RawTable()

    try:
        soup = BeautifulSoup(http_data, "html5lib")
    except ParserRejectedMarkup:
        return RawTable()

    table = soup.find("table")
    if table is None:
        return RawTable()

    rows = table.find_all("tr")
    if not rows:
        return RawTable()

    headers = [_inner_html(cell) for cell in rows[0].find_all("th")]
    body = [[_inner_html(cell) for cell in row.find_all("td")] for row in rows[1:]]
    return RawTable(headers=headers, rows=body)


def strip_markup(value: str) -> str:
    """Plain text of an HTML fragment, e.g. a cell holding a link."""
    return BeautifulSoup(value, "html5lib").get_text()


class FieldMapper:
    """
    Map table rows onto record fields by header text.

    `columns` maps a record field name to the exact header text that carries it.
    `converters` optionally post-process a field's cell value; the sentinel
    is never passed through a converter.
    """

    def __init__(
        self,
        columns: Dict[str, str],
        converters: Optional[Dict[str, Callable[[str], str]]] = None
    ):
        self.columns = columns
        self.converters = converters or {}

    def resolve(self, headers: Sequence[str]) -> Dict[str, Optional[int]]:
        """
        Build the field name to column index lookup for one table.

        Args:
            headers: Header cell text of the source table

        Returns:
            Dict mapping every field to its column index, None if absent
        """
        positions = {}
        for field_name, header in self.columns.items():
            try:
                positions[field_name] = list(headers).index(header)
            except ValueError:
                positions[field_name] = None
        return positions

    def map_rows(self, table: RawTable) -> List[Dict[str, str]]:
        """
        Produce one field dict per table row.

        Args:
            table: Extracted table

        Returns:
            List of dicts keyed by field name; absent values are MISSING
        """
        positions = self.resolve(table.headers)
        return [self._map_row(list(row), positions) for row in table.rows]

    def _map_row(self, row: List[str], positions: Dict[str, Optional[int]]) -> Dict[str, str]:
        mapped = {}
        for field_name, pos in positions.items():
            if pos is None or pos >= len(row) or row[pos] is None:
                mapped[field_name] = MISSING
                continue

            # Each cell is consumed once
            value, row[pos] = row[pos], None
            converter = self.converters.get(field_name)
            mapped[field_name] = converter(value) if converter else value
        return mapped
