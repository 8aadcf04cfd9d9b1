"""
Unit Tests for DocumentExporter and DocxWriter

The tree mapping is checked directly; serialization is checked by
reading the produced .docx back with python-docx.
"""

import io
from datetime import date, timezone

import docx
import pytest
from docx.shared import Twips

from question_bank.output_handler.document_tree import DocumentTree, Paragraph, TextRun
from question_bank.output_handler.docx_writer import DOCX_MEDIA_TYPE, DocxWriter
from question_bank.output_handler import word_exporter
from question_bank.output_handler.word_exporter import DocumentExporter
from question_bank.repository.records import QuestionRecord
from question_bank.utils.exceptions import DocumentExportError, EmptyRepositoryError


@pytest.fixture
def exporter():
    return DocumentExporter()


@pytest.fixture
def records():
    # Ids deliberately out of order and sparse, as after deletions
    return [
        QuestionRecord(id="17", question="What is 2+2?", answer="4"),
        QuestionRecord(id="3", question="", answer="Paris"),
        QuestionRecord(id="99", question="Name a prime number", answer=""),
    ]


class TestBuildDocument:

    def test_title_and_count_line(self, exporter, records):
        tree = exporter.build_document(records)

        title, count = tree.paragraphs[:2]
        assert title.heading_level == 1
        assert title.text == "QUESTION BANK"
        assert count.text == "Total questions: 3"
        assert count.spacing_after == 400

    def test_ordinal_headings_are_contiguous(self, exporter, records):
        tree = exporter.build_document(records)

        headings = [p.text for p in tree.headings(level=2)]
        assert headings == ["Question 1:", "Question 2:", "Question 3:"]

    def test_each_record_maps_to_heading_question_answer(self, exporter, records):
        tree = exporter.build_document(records)

        heading, question, answer = tree.paragraphs[2:5]
        assert (heading.spacing_before, heading.spacing_after) == (400, 200)
        assert question.runs == (TextRun("What is 2+2?", bold=True),)
        assert answer.runs == (TextRun("Answer: ", bold=True), TextRun("4"))
        assert len(tree.paragraphs) == 2 + 3 * len(records)

    def test_empty_fields_use_placeholders(self, exporter, records):
        tree = exporter.build_document(records)

        assert tree.paragraphs[6].text == "(No question yet)"
        assert tree.paragraphs[10].text == "Answer: (No answer yet)"


class TestExport:

    def test_export_when_empty_then_raises_and_writes_nothing(self, records):
        class RecordingWriter(DocxWriter):
            calls = 0

            def serialize(self, tree):
                RecordingWriter.calls += 1
                return super().serialize(tree)

        exporter = DocumentExporter(writer=RecordingWriter())

        with pytest.raises(EmptyRepositoryError):
            exporter.export([])
        assert RecordingWriter.calls == 0

    def test_filename_embeds_iso_date(self, exporter, records):
        artifact = exporter.export(records, export_date=date(2026, 3, 7))
        assert artifact.filename == "QuestionBank_2026-03-07.docx"
        assert artifact.media_type == DOCX_MEDIA_TYPE
        assert artifact.record_count == 3

    def test_default_filename_uses_utc_date(self, exporter, monkeypatch):
        seen = {}

        def fake_timestamp(format_str, moment=None, tz=None):
            seen.update(format_str=format_str, moment=moment, tz=tz)
            return "2026-03-07"

        monkeypatch.setattr(word_exporter, "generate_timestamp", fake_timestamp)

        assert exporter.get_default_filename() == "QuestionBank_2026-03-07.docx"
        assert seen == {"format_str": "%Y-%m-%d", "moment": None, "tz": timezone.utc}

    def test_export_produces_readable_docx(self, exporter, records):
        artifact = exporter.export(records)

        document = docx.Document(io.BytesIO(artifact.content))
        paragraphs = document.paragraphs

        assert paragraphs[0].text == "QUESTION BANK"
        assert paragraphs[0].style.name == "Heading 1"
        heading_texts = [p.text for p in paragraphs if p.style.name == "Heading 2"]
        assert heading_texts == ["Question 1:", "Question 2:", "Question 3:"]
        assert paragraphs[3].runs[0].bold is True
        assert paragraphs[4].runs[0].text == "Answer: "
        assert paragraphs[4].paragraph_format.space_after == Twips(400)

    def test_export_when_writer_fails_then_document_export_error(self, records):
        class BrokenWriter(DocxWriter):
            def serialize(self, tree):
                raise OSError("disk full")

        exporter = DocumentExporter(writer=BrokenWriter())
        with pytest.raises(DocumentExportError, match="disk full"):
            exporter.export(records)

    def test_artifact_save_writes_file(self, exporter, records, tmp_path):
        artifact = exporter.export(records, export_date=date(2026, 1, 2))

        path = artifact.save(tmp_path / "exports")

        assert path.name == "QuestionBank_2026-01-02.docx"
        assert path.read_bytes() == artifact.content


class TestDocxWriter:

    def test_serialize_plain_paragraph(self):
        tree = DocumentTree([Paragraph(runs=(TextRun("hello"), TextRun(" world", bold=True)))])

        document = docx.Document(io.BytesIO(DocxWriter().serialize(tree)))

        paragraph = document.paragraphs[0]
        assert paragraph.text == "hello world"
        assert [run.bold for run in paragraph.runs] == [None, True]
