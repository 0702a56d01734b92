"""
Tests for splitting sampled rows into fields.

Run with:
    pytest tests/test_table_parser.py -v
"""

from obd_sampler.data_processing.models import SampledDataset
from obd_sampler.data_processing.table_parser import fit_row, parse_table


def makeSampled(header: str, rows) -> SampledDataset:
    return SampledDataset(header_line=header, rows=list(rows), stride=1)


class TestParseTable:
    """Tests for parse_table()."""

    def test_parseTable_regularRows_splitsOnComma(self):
        """
        Given: Header 'a,b' and rows '1,2' and '5,6'
        When: parsed
        Then: Header and rows are split into fields
        """
        table = parse_table(makeSampled('a,b', ['1,2', '5,6']))

        assert table.header == ['a', 'b']
        assert table.rows == [['1', '2'], ['5', '6']]
        assert table.width_mismatches == 0

    def test_parseTable_shortRow_isPaddedAndCounted(self):
        table = parse_table(makeSampled('a,b,c', ['1']))

        assert table.rows == [['1', '', '']]
        assert table.width_mismatches == 1

    def test_parseTable_longRow_isTruncatedAndCounted(self):
        table = parse_table(makeSampled('a,b', ['1,2,3']))

        assert table.rows == [['1', '2']]
        assert table.width_mismatches == 1

    def test_parseTable_quotedComma_isNotSpecial(self):
        """
        Given: A row with a quoted field containing a comma
        When: parsed
        Then: Quotes are not honoured and the field is split
        """
        table = parse_table(makeSampled('a,b,c', ['"x,y",2']))

        assert table.rows == [['"x', 'y"', '2']]
        assert table.width_mismatches == 0

    def test_parseTable_noRows_keepsHeader(self):
        table = parse_table(makeSampled('a,b', []))

        assert table.header == ['a', 'b']
        assert table.rows == []


class TestToFrame:
    """Tests for ParsedTable.to_frame()."""

    def test_toFrame_positionalColumns_holdStrings(self):
        table = parse_table(makeSampled('Speed,Speed', ['1,2', '3,4']))

        frame = table.to_frame()

        assert list(frame.columns) == [0, 1]
        assert frame[1].tolist() == ['2', '4']


class TestFitRow:

    def test_fitRow_exactWidth_unchanged(self):
        assert fit_row(['1', '2'], 2) == ['1', '2']
