from datetime import date

from vacaplanner.services.analytics import AnalyticsService
from vacaplanner.services.holidays import easter_sunday, holidays_between, is_holiday, italian_holidays


def test_easter_dates():
    assert easter_sunday(2024) == date(2024, 3, 31)
    assert easter_sunday(2025) == date(2025, 4, 20)
    assert easter_sunday(2026) == date(2026, 4, 5)


def test_italian_holidays_sorted_and_complete():
    holidays = italian_holidays(2025)
    assert len(holidays) == 12
    assert [h.day for h in holidays] == sorted(h.day for h in holidays)
    assert is_holiday(date(2025, 4, 21)).local_name == "Pasquetta"
    assert is_holiday(date(2025, 8, 15)).local_name == "Ferragosto"
    assert is_holiday(date(2025, 8, 14)) is None


def test_holidays_endpoint(client, employee, auth_headers):
    response = client.get("/api/holidays", params={"year": 2024}, headers=auth_headers(employee))
    assert response.status_code == 200
    data = response.json()
    assert data[0] == {"date": "2024-01-01", "name": "New Year's Day", "localName": "Capodanno"}
    assert {"date": "2024-04-01", "name": "Easter Monday", "localName": "Pasquetta"} in data


def test_analytics_summary(client, employee, other_employee, admin_user, auth_headers, db_session):
    headers = auth_headers(employee)
    client.post("/api/leave-requests", headers=headers, json={
        "startDate": "2024-06-03", "endDate": "2024-06-05", "type": "VACATION",
    })
    client.post("/api/leave-requests", headers=headers, json={
        "startDate": "2024-06-10", "endDate": "2024-06-10", "type": "VACATION",
        "startTime": "09:00", "endTime": "13:00",
    })
    rejected = client.post("/api/leave-requests", headers=auth_headers(other_employee), json={
        "startDate": "2024-07-01", "endDate": "2024-07-10", "type": "SICK",
    }).json()["id"]
    client.post("/api/leave-requests", headers=auth_headers(other_employee), json={
        "startDate": "2024-07-15", "endDate": "2024-07-16", "type": "PERSONAL",
    })
    client.patch(f"/api/leave-requests/{rejected}", headers=auth_headers(admin_user), json={"status": "REJECTED"})

    summary = AnalyticsService(db_session).summary(2024, today=date(2024, 6, 10))

    assert [s.user_id for s in summary.by_user] == [employee.id, other_employee.id]
    assert summary.by_user[0].vacation == 3.5
    assert summary.by_user[1].personal == 2
    assert summary.by_user[1].sick == 0
    assert summary.by_month[5].vacation == 3.5
    assert summary.by_month[6].personal == 2
    assert summary.totals == {"vacation": 3.5, "sick": 0, "personal": 2}

    upcoming = {u.start_date: u for u in summary.upcoming}
    assert set(upcoming) == {date(2024, 6, 10), date(2024, 7, 15)}
    assert upcoming[date(2024, 6, 10)].half_day_label == "Mattina"


def test_analytics_endpoint(client, employee, auth_headers):
    response = client.get("/api/analytics/summary", params={"year": 2024}, headers=auth_headers(employee))
    assert response.status_code == 200
    data = response.json()
    assert data["year"] == 2024
    assert len(data["byMonth"]) == 12
    assert data["byUser"] == []


def test_holidays_between_inclusive_range():
    found = holidays_between(date(2024, 12, 24), date(2025, 1, 6))
    assert [h.local_name for h in found] == ["Natale", "Santo Stefano", "Capodanno", "Epifania"]
    assert holidays_between(date(2024, 8, 15), date(2024, 8, 15))[0].local_name == "Ferragosto"
    assert holidays_between(date(2024, 8, 19), date(2024, 8, 23)) == []


def test_upcoming_absences_list_holidays(client, employee, auth_headers, db_session):
    client.post("/api/leave-requests", headers=auth_headers(employee), json={
        "startDate": "2024-08-12", "endDate": "2024-08-16", "type": "VACATION",
    })

    summary = AnalyticsService(db_session).summary(2024, today=date(2024, 8, 1))

    assert [u.holidays for u in summary.upcoming] == [["Ferragosto"]]


def test_analytics_endpoint_lists_holidays_in_upcoming(client, employee, auth_headers):
    headers = auth_headers(employee)
    client.post("/api/leave-requests", headers=headers, json={
        "startDate": "2099-12-24", "endDate": "2099-12-27", "type": "VACATION",
    })

    data = client.get("/api/analytics/summary", params={"year": 2099}, headers=headers).json()

    assert data["upcoming"][0]["holidays"] == ["Natale", "Santo Stefano"]
