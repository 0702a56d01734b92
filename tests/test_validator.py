"""
Tests for the FileValidator and RawFile handles.

Run with:
    pytest tests/test_validator.py -v
"""

import pytest

from obd_sampler.data_processing.exceptions import FileTooLargeError, InvalidFileTypeError
from obd_sampler.data_processing.models import RawFile
from obd_sampler.data_processing.validator import FileValidator, validate_files
from obd_sampler.settings import MAX_FILE_SIZE_BYTES


def makeFile(name: str = 'log.csv', mimeType: str = 'text/csv', size: int = 100) -> RawFile:
    return RawFile(name=name, mime_type=mimeType, size_bytes=size, content='a,b')


class TestFileValidator:
    """Tests for the type and size policy."""

    def test_validate_allCsvBelowCeiling_accepts(self):
        """
        Given: Two CSV files below the ceiling
        When: validate() is called
        Then: No error is raised
        """
        FileValidator().validate([makeFile('a.csv'), makeFile('b.csv', size=MAX_FILE_SIZE_BYTES - 1)])

    def test_validate_emptySet_accepts(self):
        """
        Given: No files
        When: validate() is called
        Then: No error is raised
        """
        validate_files([])

    def test_validate_oneWrongType_rejectsWholeSet(self):
        """
        Given: A CSV and a plain text file
        When: validate() is called
        Then: Raises InvalidFileTypeError naming the text file
        """
        files = [makeFile('a.csv'), makeFile('notes.txt', mimeType='text/plain')]

        with pytest.raises(InvalidFileTypeError) as excInfo:
            FileValidator().validate(files)

        assert excInfo.value.kind == 'InvalidFileType'
        assert excInfo.value.message == 'File type is incorrect. Make sure it is a .csv file'
        assert excInfo.value.details['files'] == ['notes.txt']

    def test_validate_sizeAtCeiling_rejects(self):
        """
        Given: A CSV of exactly 10,000,000 bytes
        When: validate() is called
        Then: Raises FileTooLargeError
        """
        with pytest.raises(FileTooLargeError) as excInfo:
            FileValidator().validate([makeFile(size=10_000_000)])

        assert excInfo.value.kind == 'FileTooLarge'
        assert excInfo.value.message == 'File is too large. 10MB max.'

    def test_validate_wrongTypeAndTooLarge_reportsTypeFirst(self):
        """
        Given: One file of the wrong type and another one too large
        When: validate() is called
        Then: The type violation is reported
        """
        files = [makeFile(size=MAX_FILE_SIZE_BYTES + 1), makeFile('x.json', mimeType='application/json')]

        with pytest.raises(InvalidFileTypeError):
            FileValidator().validate(files)

    def test_validate_customCeiling_isApplied(self):
        """
        Given: A validator with a 50 byte ceiling
        When: a 60 byte file is validated
        Then: Raises FileTooLargeError
        """
        with pytest.raises(FileTooLargeError):
            validate_files([makeFile(size=60)], max_size_bytes=50)


class TestRawFile:
    """Tests for building file handles."""

    def test_fromPath_csvExtension_isTextCsv(self, writeCsv):
        """
        Given: A .csv file on disk
        When: RawFile.from_path() is called
        Then: MIME type is text/csv and size is the byte size
        """
        path = writeCsv('drive.csv', 'a,b\n1,2')

        raw = RawFile.from_path(path)

        assert raw.name == 'drive.csv'
        assert raw.mime_type == 'text/csv'
        assert raw.size_bytes == 7
        assert raw.content is None
        assert raw.read_text() == 'a,b\n1,2'

    def test_fromPath_textExtension_isNotCsv(self, writeCsv):
        """
        Given: A .txt file on disk
        When: RawFile.from_path() is called
        Then: MIME type is not text/csv
        """
        raw = RawFile.from_path(writeCsv('notes.txt', 'hello'))

        assert raw.mime_type != 'text/csv'

    def test_fromText_sizeIsUtf8Length(self):
        """
        Given: Text with a multi-byte character
        When: RawFile.from_text() is called
        Then: size_bytes counts UTF-8 bytes
        """
        raw = RawFile.from_text('t.csv', 'Temperature(°C)')

        assert raw.size_bytes == len('Temperature(°C)'.encode('utf-8'))
