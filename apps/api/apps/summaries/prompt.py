"""
Summary document rendering.

Turns a patient's timeline into the plain-text document sent to the
summarizer: a lead instruction, then vitals, notes and file names in
timeline order, then the task instruction. A section whose records are
absent is left out entirely.
"""
from django.conf import settings
from django.utils import timezone

from apps.records.stores import RecordKind
from apps.summaries.summarizer import SummaryRequest

LEAD_INSTRUCTION = (
    "Generate a concise health summary for the patient '{name}'.\n\n"
    "Include current and past health conditions based on the provided data. "
    "Highlight any significant trends or concerns.\n\n"
)

TASK_INSTRUCTION = (
    "Based on this, provide a concise summary of the patient's health status, "
    "key health events, and any notable observations. "
    "Focus on clinically relevant information."
)

VITALS_HEADER = 'Vitals History:'
NOTES_HEADER = "Doctor's Notes:"
FILES_HEADER = 'Uploaded Files (names):'

UNKNOWN_AUTHOR = 'Unknown'


def _date(value):
    return f"{timezone.localtime(value):%Y-%m-%d}"


def _one_line(text):
    return ' '.join(str(text).split())


def format_vital(vital):
    parts = []
    if vital.bp:
        parts.append(f"BP {vital.bp}")
    if vital.sugar is not None:
        parts.append(f"Sugar {vital.sugar}")
    if vital.heart_rate is not None:
        parts.append(f"HR {vital.heart_rate}")
    if vital.temperature is not None:
        parts.append(f"Temp {vital.temperature}")
    if vital.weight is not None:
        parts.append(f"Weight {vital.weight}")
    values = ', '.join(parts) if parts else 'no values recorded'
    return f"- {_date(vital.created_at)}: {values}"


def format_note(note):
    author = note.doctor.name if note.doctor and note.doctor.name else UNKNOWN_AUTHOR
    return f"- {_date(note.created_at)} (Dr. {author}): {_one_line(note.content)}"


def format_file(record_file):
    return f"- {record_file.file_name} ({_date(record_file.created_at)})"


SECTIONS = (
    (RecordKind.VITAL, VITALS_HEADER, format_vital),
    (RecordKind.NOTE, NOTES_HEADER, format_note),
    (RecordKind.FILE, FILES_HEADER, format_file),
)


def render_section(header, records, formatter, max_entries):
    """
    Render one section, keeping only the ``max_entries`` most recent records.

    Returns an empty string when there are no records.
    """
    if not records:
        return ''

    omitted = 0
    if max_entries is not None and len(records) > max_entries:
        omitted = len(records) - max_entries
        records = records[omitted:]

    lines = [header]
    if omitted:
        lines.append(f"- ({omitted} earlier entries omitted)")
    lines.extend(formatter(record) for record in records)
    return '\n'.join(lines) + '\n\n'


def render_document(patient, timeline, max_entries=None):
    """
    Render the summary document for ``patient`` from ``timeline``.

    Args:
        patient: Patient user (its name is quoted in the lead instruction)
        timeline: Aggregated Timeline of the patient's records
        max_entries: Per-section bound; defaults to SUMMARY_MAX_ENTRIES_PER_SECTION
    """
    if max_entries is None:
        max_entries = settings.SUMMARY_MAX_ENTRIES_PER_SECTION

    document = LEAD_INSTRUCTION.format(name=patient.name or 'Unnamed patient')
    for kind, header, formatter in SECTIONS:
        document += render_section(header, timeline.of_kind(kind), formatter, max_entries)
    document += TASK_INSTRUCTION
    return document


def build_summary_request(document) -> SummaryRequest:
    """Wrap the document with the fixed response-length and temperature bounds."""
    return SummaryRequest(
        document=document,
        max_length=settings.SUMMARY_MAX_TOKENS,
        determinism=settings.SUMMARY_TEMPERATURE,
    )
