"""Attendance submission protocol tests."""
import hashlib
from datetime import time

import pytest

from qr_attendance.errors import (
    DeviceAlreadyUsed,
    DuplicateRollNumber,
    InvalidToken,
    SessionNotFound,
    SessionNotOpen,
    ValidationError,
)
from qr_attendance.services.fingerprint_service import NetworkIdentity
from conftest import at, make_session_input

DEVICE_A = NetworkIdentity(user_agent='Device-A', address='1.1.1.1')
DEVICE_B = NetworkIdentity(user_agent='Device-B', address='2.2.2.2')
DEVICE_X = NetworkIdentity(user_agent='Device-X', address='4.4.4.4')


def test_submit_records_attendance(attendance_service, open_session):
    record = attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_A, at(9, 15))

    assert record.id is not None
    assert record.session_id == open_session.id
    assert record.roll_number == '2024CS101'
    assert record.submitted_at == at(9, 15)
    assert record.status == 'present'


def test_fingerprint_is_hash_of_identity_and_session(attendance_service, open_session):
    record = attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_A, at(9, 15))

    expected = hashlib.sha256(f'Device-A|1.1.1.1|{open_session.id}'.encode()).hexdigest()
    assert record.device_fingerprint == expected


def test_resubmit_same_roll_same_device(attendance_service, open_session):
    attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_A, at(9, 15))

    with pytest.raises(DuplicateRollNumber):
        attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_A, at(9, 16))


def test_same_roll_from_other_device(attendance_service, open_session):
    attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_A, at(9, 15))

    with pytest.raises(DuplicateRollNumber):
        attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_B, at(9, 16))


def test_device_reused_for_other_roll(attendance_service, open_session):
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_X, at(9, 20))

    with pytest.raises(DeviceAlreadyUsed):
        attendance_service.submit(open_session.id, 'R2', open_session.qr_token, DEVICE_X, at(9, 21))


def test_device_check_precedes_window(attendance_service, open_session):
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_X, at(9, 20))

    with pytest.raises(DeviceAlreadyUsed):
        attendance_service.submit(open_session.id, 'R2', open_session.qr_token, DEVICE_X, at(11, 0))


def test_same_device_in_other_session_allowed(attendance_service, session_service, open_session):
    other = session_service.create('T-001', make_session_input(course_code='CS102'))
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_X, at(9, 20))

    record = attendance_service.submit(other.id, 'R2', other.qr_token, DEVICE_X, at(9, 21))

    assert record.session_id == other.id


def test_submit_after_window(attendance_service, session_service):
    session = session_service.create('T-001', make_session_input(start_time=time(9, 0), end_time=time(9, 5)))

    with pytest.raises(SessionNotOpen):
        attendance_service.submit(session.id, '2024CS101', session.qr_token, DEVICE_A, at(9, 10))


def test_submit_before_window(attendance_service, open_session):
    with pytest.raises(SessionNotOpen):
        attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_A, at(8, 55))


def test_submit_to_ended_session(attendance_service, session_service, open_session):
    session_service.end(open_session.id, 'T-001')

    with pytest.raises(SessionNotOpen):
        attendance_service.submit(open_session.id, '2024CS101', open_session.qr_token, DEVICE_A, at(9, 15))


@pytest.mark.parametrize('position', [0, 10, -1])
def test_token_off_by_one_character(attendance_service, open_session, position):
    token = list(open_session.qr_token)
    token[position] = 'A' if token[position] != 'A' else 'B'

    with pytest.raises(InvalidToken):
        attendance_service.submit(open_session.id, 'R1', ''.join(token), DEVICE_A, at(9, 15))


def test_token_prefix_rejected(attendance_service, open_session):
    with pytest.raises(InvalidToken):
        attendance_service.submit(open_session.id, 'R1', open_session.qr_token[:-1], DEVICE_A, at(9, 15))


def test_invalid_token_is_validation_class(attendance_service, open_session):
    with pytest.raises(ValidationError):
        attendance_service.submit(open_session.id, 'R1', 'wrong', DEVICE_A, at(9, 15))


@pytest.mark.parametrize('roll_number', ['', 'has space', 'semi;colon', 'x' * 33, None, 'R1\n'])
def test_bad_roll_number(attendance_service, open_session, roll_number):
    with pytest.raises(ValidationError) as excinfo:
        attendance_service.submit(open_session.id, roll_number, open_session.qr_token, DEVICE_A, at(9, 15))

    assert not isinstance(excinfo.value, InvalidToken)


def test_roll_number_checked_before_session_lookup(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.submit('missing', 'bad roll', 'token', DEVICE_A, at(9, 15))


def test_missing_token(attendance_service, open_session):
    with pytest.raises(ValidationError) as excinfo:
        attendance_service.submit(open_session.id, 'R1', '', DEVICE_A, at(9, 15))

    assert excinfo.value.details == ["qr_token is required"]


def test_unknown_session(attendance_service):
    with pytest.raises(SessionNotFound):
        attendance_service.submit('00000000-0000-4000-8000-000000000000', 'R1', 'token', DEVICE_A, at(9, 15))


def test_roll_race_resolved_by_constraint(attendance_service, open_session, monkeypatch):
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_A, at(9, 15))
    # Pre-checks that raced and saw nothing
    monkeypatch.setattr(attendance_service.attendance_store, 'find_by_device', lambda *args: None)
    monkeypatch.setattr(attendance_service.attendance_store, 'find_by_roll_number', lambda *args: None)

    with pytest.raises(DuplicateRollNumber):
        attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_B, at(9, 16))


def test_device_race_resolved_by_constraint(attendance_service, open_session, monkeypatch):
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_X, at(9, 15))
    monkeypatch.setattr(attendance_service.attendance_store, 'find_by_device', lambda *args: None)

    with pytest.raises(DeviceAlreadyUsed):
        attendance_service.submit(open_session.id, 'R2', open_session.qr_token, DEVICE_X, at(9, 16))

    assert attendance_service.count_by_session(open_session.id) == 1


def test_get_by_session_is_chronological(attendance_service, open_session):
    token = open_session.qr_token
    attendance_service.submit(open_session.id, 'R3', token, NetworkIdentity('ua-3', '3.3.3.3'), at(9, 40))
    attendance_service.submit(open_session.id, 'R1', token, NetworkIdentity('ua-1', '1.1.1.1'), at(9, 5))
    attendance_service.submit(open_session.id, 'R2', token, NetworkIdentity('ua-2', '2.2.2.2'), at(9, 20))

    records = attendance_service.get_by_session(open_session.id)

    assert [r.roll_number for r in records] == ['R1', 'R2', 'R3']
    assert [r.roll_number for r in attendance_service.get_by_session(open_session.id)] == ['R1', 'R2', 'R3']


def test_get_by_session_time_range(attendance_service, open_session):
    token = open_session.qr_token
    attendance_service.submit(open_session.id, 'R1', token, NetworkIdentity('ua-1', '1.1.1.1'), at(9, 5))
    attendance_service.submit(open_session.id, 'R2', token, NetworkIdentity('ua-2', '2.2.2.2'), at(9, 20))
    attendance_service.submit(open_session.id, 'R3', token, NetworkIdentity('ua-3', '3.3.3.3'), at(9, 40))

    records = attendance_service.get_by_session(open_session.id, since=at(9, 10), until=at(9, 30))

    assert [r.roll_number for r in records] == ['R2']


def test_uses_clock_when_now_omitted(attendance_service, open_session, clock):
    clock.current = at(9, 45)

    record = attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_A)

    assert record.submitted_at == at(9, 45)


def test_trailing_newline_is_not_a_second_roll_number(attendance_service, open_session):
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_A, at(9, 15))

    with pytest.raises(ValidationError):
        attendance_service.submit(open_session.id, 'R1\n', open_session.qr_token, DEVICE_B, at(9, 16))

    assert attendance_service.count_by_session(open_session.id) == 1


def test_check_status_before_and_after_marking(attendance_service, open_session):
    before = attendance_service.check_status(open_session.id, 'R1')
    attendance_service.submit(open_session.id, 'R1', open_session.qr_token, DEVICE_A, at(9, 12))
    after = attendance_service.check_status(open_session.id, 'R1')

    assert before['has_marked'] is False
    assert before['submitted_at'] is None
    assert after['has_marked'] is True
    assert after['submitted_at'] == '2026-01-05T09:12:00'
    assert attendance_service.check_status(open_session.id, 'R2')['has_marked'] is False


def test_check_status_rejects_bad_input(attendance_service, open_session):
    with pytest.raises(ValidationError):
        attendance_service.check_status(open_session.id, 'bad roll')
    with pytest.raises(SessionNotFound):
        attendance_service.check_status('00000000-0000-4000-8000-000000000000', 'R1')
