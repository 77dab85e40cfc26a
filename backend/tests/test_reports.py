"""Report generation tests."""
import json
import re

import pytest

from qr_attendance.errors import ValidationError
from qr_attendance.services.fingerprint_service import NetworkIdentity
from qr_attendance.services.report_service import ReportService
from conftest import at

TEACHER_A = {'Teacher-Id': 'T-001'}


@pytest.fixture
def attended_session(teachers, attendance_service, open_session):
    token = open_session.qr_token
    attendance_service.submit(open_session.id, 'R2', token, NetworkIdentity('ua-2', '2.2.2.2'), at(9, 30))
    attendance_service.submit(open_session.id, 'R1', token, NetworkIdentity('ua-1', '1.1.1.1'), at(9, 10))
    return open_session


def test_csv_rows_in_submission_order(attendance_service, attended_session):
    records = attendance_service.get_by_session(attended_session.id)

    content, mimetype, name = ReportService.build(attended_session, records, 'csv')

    lines = content.decode('utf-8').splitlines()
    assert mimetype == 'text/csv'
    assert name == 'attendance_CS101_2026-01-05.csv'
    assert lines[0] == 'Roll Number,Submitted At,Status'
    assert lines[1] == 'R1,2026-01-05T09:10:00,present'
    assert lines[2] == 'R2,2026-01-05T09:30:00,present'


def test_csv_for_empty_session(open_session):
    content, _, _ = ReportService.build(open_session, [], 'CSV')

    assert content.decode('utf-8').splitlines() == ['Roll Number,Submitted At,Status']


def test_pdf_document(attendance_service, attended_session):
    records = attendance_service.get_by_session(attended_session.id)

    content, mimetype, name = ReportService.build(attended_session, records, 'pdf')

    assert mimetype == 'application/pdf'
    assert name.endswith('.pdf')
    assert content.startswith(b'%PDF')


def test_pdf_spans_pages(open_session, attendance_service):
    for i in range(120):
        attendance_service.submit(
            open_session.id, f'R{i:03d}', open_session.qr_token,
            NetworkIdentity(f'ua-{i}', '1.1.1.1'), at(9, 1 + i // 3)
        )
    records = attendance_service.get_by_session(open_session.id)

    content, _, _ = ReportService.build(open_session, records, 'pdf')

    page_counts = [int(n) for n in re.findall(rb"/Count (\d+)", content)]
    assert len(records) == 120
    assert max(page_counts) >= 2


def test_unsupported_format(open_session):
    with pytest.raises(ValidationError):
        ReportService.build(open_session, [], 'xlsx')


def test_download_csv(client, attended_session):
    response = client.get(f'/api/reports/session/{attended_session.id}/csv', headers=TEACHER_A)

    assert response.status_code == 200
    assert 'attachment' in response.headers['Content-Disposition']
    assert response.mimetype == 'text/csv'
    assert b'R1' in response.data


def test_download_pdf(client, attended_session):
    response = client.get(f'/api/reports/session/{attended_session.id}/pdf', headers=TEACHER_A)

    assert response.status_code == 200
    assert response.headers['Content-Disposition']
    assert response.data.startswith(b'%PDF')


def test_download_with_time_range(client, attended_session):
    response = client.get(
        f'/api/reports/session/{attended_session.id}/csv'
        '?since=2026-01-05T09:20:00&until=2026-01-05T10:00:00',
        headers=TEACHER_A
    )

    lines = response.data.decode('utf-8').splitlines()
    assert [line.split(',')[0] for line in lines[1:]] == ['R2']


def test_download_bad_range(client, attended_session):
    response = client.get(
        f'/api/reports/session/{attended_session.id}/csv?since=yesterday',
        headers=TEACHER_A
    )

    assert response.status_code == 400
    assert json.loads(response.data)['code'] == 'VALIDATION_ERROR'


def test_download_unsupported_format(client, attended_session):
    response = client.get(f'/api/reports/session/{attended_session.id}/docx', headers=TEACHER_A)

    assert response.status_code == 400


def test_download_blocked_for_other_teacher(client, attended_session):
    response = client.get(f'/api/reports/session/{attended_session.id}/csv', headers={'Teacher-Id': 'T-002'})

    assert response.status_code == 403
    assert json.loads(response.data)['error'] == True


def test_download_requires_teacher(client, attended_session):
    response = client.get(f'/api/reports/session/{attended_session.id}/csv')

    assert response.status_code == 401
