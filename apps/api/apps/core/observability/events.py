"""
Domain events logging helpers.

Provides structured event logging for record access and summarization.
"""
from typing import Dict, Optional
from .logging import get_sanitized_logger, sanitize_dict

logger = get_sanitized_logger(__name__)


def log_domain_event(
    event_name: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    entity_ids: Optional[Dict[str, str]] = None,
    result: str = 'success',
    **extra_fields
):
    """
    Log a domain event with structured data.

    Args:
        event_name: Name of the event (e.g., 'note_added', 'record_access_denied')
        entity_type: Type of entity (e.g., 'Note', 'ConsultationLink')
        entity_id: ID of primary entity
        entity_ids: Dictionary of related entity IDs
        result: Result of operation (success, failure, blocked, etc.)
        **extra_fields: Additional fields to log (will be sanitized)

    Example:
        log_domain_event(
            'note_added',
            entity_type='Note',
            entity_id=str(note.id),
            entity_ids={'patient_id': str(note.patient_id)},
            result='success',
        )
    """
    event_data = {
        'event': event_name,
        'result': result,
    }

    if entity_type:
        event_data['entity_type'] = entity_type

    if entity_id:
        event_data['entity_id'] = entity_id

    if entity_ids:
        event_data.update(entity_ids)

    event_data.update(sanitize_dict(extra_fields))

    if result in ['failure', 'error']:
        logger.error(f'Domain event: {event_name}', extra=event_data)
    elif result in ['warning', 'blocked', 'unavailable']:
        logger.warning(f'Domain event: {event_name}', extra=event_data)
    else:
        logger.info(f'Domain event: {event_name}', extra=event_data)


def log_access_denied(actor, patient_id, operation, reason):
    """Log an authorization denial for a patient record."""
    log_domain_event(
        'record_access_denied',
        entity_type='PatientRecord',
        entity_id=str(patient_id),
        entity_ids={'actor_id': str(actor.id), 'patient_id': str(patient_id)},
        result='blocked',
        actor_role=actor.role,
        operation=str(operation),
        reason=str(reason),
    )


def log_consultation_change(doctor_id, patient_id, action, changed=True):
    """Log a doctor starting or ending a consultation."""
    log_domain_event(
        f'consultation_{action}',
        entity_type='ConsultationLink',
        entity_ids={'doctor_id': str(doctor_id), 'patient_id': str(patient_id)},
        result='success' if changed else 'noop',
    )


def log_record_written(record, kind):
    """Log a note or prescription written for a patient."""
    log_domain_event(
        f'{kind}_written',
        entity_type=record.__class__.__name__,
        entity_id=str(record.pk),
        entity_ids={
            'patient_id': str(record.patient_id),
            'doctor_id': str(record.doctor_id),
        },
        result='success',
    )


def log_partial_data(patient_id, kind, error):
    """Log a record store that failed during aggregation."""
    log_domain_event(
        'timeline_partial_data',
        entity_type='Timeline',
        entity_ids={'patient_id': str(patient_id)},
        result='failure',
        kind=str(kind),
        error_type=error.__class__.__name__,
    )


def log_summary_outcome(patient_id, result, entries_count=None, duration_ms=None):
    """Log the outcome of a summary request (never the summary text)."""
    extra = {}
    if entries_count is not None:
        extra['entries_count'] = entries_count
    if duration_ms is not None:
        extra['duration_ms'] = duration_ms
    if not result.ok:
        extra['reason'] = str(result.reason)

    log_domain_event(
        'summary_generated' if result.ok else 'summary_unavailable',
        entity_type='Summary',
        entity_ids={'patient_id': str(patient_id)},
        result='success' if result.ok else 'unavailable',
        **extra
    )
