from datetime import date


def post(client, headers, kind, **payload):
    r = client.post(f"/api/v1/{kind}", json=payload, headers=headers)
    assert r.status_code == 201, r.text


def test_period_report_for_march(client, auth):
    h = auth["headers"]
    post(client, h, "expense", amount=50, category="Food & Dining", date="2024-03-05")
    post(client, h, "expense", amount=30, category="Food & Dining", date="2024-03-10")
    post(client, h, "income", amount=1000, source="Salary", date="2024-03-01")
    post(client, h, "income", amount=25, source="Refund", date="2024-03-31")
    post(client, h, "expense", amount=500, category="Other", date="2024-04-01")

    r = client.get("/api/v1/reports", params={"month": 3, "year": 2024}, headers=h)
    assert r.status_code == 200, r.text
    data = r.json()["data"]

    assert data["categoryData"] == [{"category": "Food & Dining", "total": 80, "count": 2}]
    assert data["totalIncome"] == 1025
    assert data["totalExpenses"] == 80
    assert data["balance"] == 945
    assert data["period"] == {"month": 3, "year": 2024, "monthName": "March 2024"}

    daily = data["monthlyData"]
    assert [d["day"] for d in daily] == list(range(1, 32))
    by_day = {d["day"]: d for d in daily}
    assert by_day[1] == {"day": 1, "income": 1000, "expenses": 0}
    assert by_day[5] == {"day": 5, "income": 0, "expenses": 50}
    assert by_day[10]["expenses"] == 30
    assert by_day[31] == {"day": 31, "income": 25, "expenses": 0}
    assert by_day[15] == {"day": 15, "income": 0, "expenses": 0}


def test_period_report_leap_february_has_29_days(client, auth):
    data = client.get("/api/v1/reports", params={"month": 2, "year": 2024}, headers=auth["headers"]).json()["data"]
    assert len(data["monthlyData"]) == 29
    assert data["categoryData"] == []
    data = client.get("/api/v1/reports", params={"month": 2, "year": 2023}, headers=auth["headers"]).json()["data"]
    assert len(data["monthlyData"]) == 28


def test_period_report_defaults_to_current_month(client, auth):
    today = date.today()
    data = client.get("/api/v1/reports", headers=auth["headers"]).json()["data"]
    assert data["period"]["month"] == today.month
    assert data["period"]["year"] == today.year


def test_yearly_report(client, auth):
    h = auth["headers"]
    post(client, h, "income", amount=1200, source="Salary", date="2023-01-31")
    post(client, h, "income", amount=1200, source="Salary", date="2023-07-15")
    post(client, h, "expense", amount=300, category="Housing & Rent", date="2023-07-01")
    post(client, h, "expense", amount=60, category="Utilities", date="2023-12-31")
    post(client, h, "income", amount=9999, source="Other year", date="2024-01-01")

    r = client.get("/api/v1/reports/yearly", params={"year": 2023}, headers=h)
    assert r.status_code == 200, r.text
    data = r.json()["data"]

    assert data["year"] == 2023
    monthly = data["monthlyData"]
    assert [m["month"] for m in monthly] == list(range(1, 13))
    assert monthly[0]["monthName"] == "January"
    assert monthly[0]["income"] == 1200
    assert monthly[6] == {"month": 7, "monthName": "July", "income": 1200, "expenses": 300, "balance": 900}
    assert monthly[11]["expenses"] == 60
    assert monthly[3] == {"month": 4, "monthName": "April", "income": 0, "expenses": 0, "balance": 0}

    assert data["totalIncome"] == sum(m["income"] for m in monthly) == 2400
    assert data["totalExpenses"] == sum(m["expenses"] for m in monthly) == 360
    assert data["totalBalance"] == 2040
    # fixed divisor of 12 regardless of how many months had activity
    assert data["averageMonthlyIncome"] == data["totalIncome"] / 12 == 200
    assert data["averageMonthlyExpenses"] == data["totalExpenses"] / 12 == 30


def test_reports_validate_query(client, auth):
    assert client.get("/api/v1/reports", params={"month": 0, "year": 2024}, headers=auth["headers"]).status_code == 400
    assert client.get("/api/v1/reports/yearly", params={"year": "abc"}, headers=auth["headers"]).status_code == 400
