"""

분석 / 내보내기 API 테스트.
- moderator 이상만 접근, 공개 통계는 인증 불필요
- 기간별 추세 / 비교 입력 검증
- CSV(BOM + 헤더), XLSX(시트 구성), JSON 내보내기

"""

import csv
import io
from datetime import timedelta

from openpyxl import load_workbook

from peptitrace.models.experience import Lifecycle
from peptitrace.models.user import Role
from tests.helpers import API, auth_header, create_experience_in_db, create_peptide_in_db, user_with_token


def _parse_csv_text(text: str) -> list[list[str]]:
    # Excel 호환 BOM 제거
    text = text.lstrip("\ufeff")
    return list(csv.reader(io.StringIO(text)))


def _setup(client, db_session):
    moderator = user_with_token(client, db_session, role=Role.MODERATOR)
    peptide = create_peptide_in_db(db_session, name="BPC-157")
    create_experience_in_db(db_session, user=moderator["user"], peptide=peptide, outcomes={"energy": 6, "sleep": 8})
    create_experience_in_db(db_session, user=moderator["user"], peptide=peptide, outcomes={"energy": 9})
    create_experience_in_db(
        db_session, user=moderator["user"], peptide=peptide, outcomes={"energy": 1}, lifecycle=Lifecycle.RETRACTED
    )
    return moderator, peptide


def test_analytics_requires_staff(client, db_session):
    user = user_with_token(client, db_session)
    r = client.get(f"{API}/analytics", headers=auth_header(user["token"]))
    assert r.status_code == 403
    assert r.json()["error"] == "Insufficient permissions for read on analytics"

    r = client.get(f"{API}/analytics/export", headers=auth_header(user["token"]))
    assert r.status_code == 403
    assert r.json()["error"] == "Insufficient permissions for export on analytics"


def test_usage_analytics_excludes_retracted(client, db_session):
    moderator, _ = _setup(client, db_session)

    r = client.get(f"{API}/analytics", headers=auth_header(moderator["token"]))
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["total_experiences"] == 2
    assert data["total_peptides"] == 1
    assert data["average_rating"] == 8.0
    assert data["effectiveness_data"][0]["peptide"] == "BPC-157"
    assert data["effectiveness_data"][0]["effectiveness"]["energy"] == 7.5


def test_public_summary_without_auth(client, db_session):
    _setup(client, db_session)
    r = client.get(f"{API}/analytics/public")
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["total_experiences"] == 2
    assert data["top_peptides"][0]["name"] == "BPC-157"


def test_grouped_counts_and_active_users(client, db_session):
    moderator = user_with_token(client, db_session, role=Role.MODERATOR)
    other = user_with_token(client, db_session)
    aod = create_peptide_in_db(db_session, name="AOD-9604")
    bpc = create_peptide_in_db(db_session, name="BPC-157")

    create_experience_in_db(db_session, user=moderator["user"], peptide=aod, outcomes={"energy": 8})
    create_experience_in_db(db_session, user=other["user"], peptide=aod, outcomes={"energy": 6})
    create_experience_in_db(db_session, user=None, peptide=aod, outcomes={"energy": 4})
    create_experience_in_db(
        db_session, user=other["user"], peptide=bpc, outcomes={"energy": 10}, age=timedelta(days=40)
    )
    create_experience_in_db(
        db_session, user=moderator["user"], peptide=bpc, outcomes={"energy": 1}, lifecycle=Lifecycle.RETRACTED
    )
    headers = auth_header(moderator["token"])

    usage = client.get(f"{API}/analytics", headers=headers).json()["data"]
    assert usage["total_experiences"] == 4
    assert usage["top_peptides_count"] == 2
    # 익명 경험과 30일 지난 경험은 활성 사용자에 포함되지 않음
    assert usage["active_users_count"] == 2
    assert usage["average_rating"] == 7.0

    expected_top = [
        {"name": "AOD-9604", "experiences": 3, "rating": 6.0},
        {"name": "BPC-157", "experiences": 1, "rating": 10.0},
    ]
    dashboard = client.get(f"{API}/analytics/dashboard", headers=headers).json()["data"]
    assert dashboard["top_peptides"] == expected_top
    assert dashboard["peptide_frequency"] == [{"name": "AOD-9604", "value": 3}, {"name": "BPC-157", "value": 1}]
    assert dashboard["outcome_distribution"] == {"energy": 7.0}

    public = client.get(f"{API}/analytics/public").json()["data"]
    assert public["active_users"] == 2
    assert public["top_peptides"] == expected_top


def test_peptide_trends_and_comparison_validation(client, db_session):
    moderator, peptide = _setup(client, db_session)
    headers = auth_header(moderator["token"])

    trends = client.get(f"{API}/analytics/peptide-trends?period=daily", headers=headers)
    assert trends.status_code == 200, trends.text
    assert trends.json()["data"]["summary"]["total_experiences"] == 2

    bad_period = client.get(f"{API}/analytics/peptide-trends?period=hourly", headers=headers)
    assert bad_period.status_code == 400

    missing = client.get(f"{API}/analytics/peptide-comparison", headers=headers)
    assert missing.status_code == 400
    assert missing.json()["error"] == "Peptide IDs are required"

    compared = client.get(f"{API}/analytics/peptide-comparison?ids={peptide.id}", headers=headers)
    assert compared.status_code == 200, compared.text
    assert compared.json()["data"][0]["experiences"] == 2

    dashboard = client.get(f"{API}/analytics/dashboard", headers=headers)
    assert dashboard.status_code == 200, dashboard.text
    assert dashboard.json()["data"]["total_experiences"] == 2


def test_export_csv(client, db_session):
    moderator, _ = _setup(client, db_session)

    res = client.get(f"{API}/analytics/export?format=csv&type=experiences", headers=auth_header(moderator["token"]))
    assert res.status_code == 200, res.text
    assert res.headers.get("content-type", "").startswith("text/csv")
    cd = res.headers.get("content-disposition", "")
    assert "attachment" in cd
    assert "peptitrace_experiences_" in cd
    assert res.content.startswith("\ufeff".encode("utf-8"))

    rows = _parse_csv_text(res.text)
    assert rows[0][:2] == ["tracking_id", "peptide_name"]
    assert len(rows[1:]) == 2
    assert all(r[1] == "BPC-157" for r in rows[1:])


def test_export_xlsx(client, db_session):
    moderator, _ = _setup(client, db_session)

    res = client.get(f"{API}/analytics/export?format=xlsx", headers=auth_header(moderator["token"]))
    assert res.status_code == 200, res.text
    assert "spreadsheetml" in res.headers.get("content-type", "")

    wb = load_workbook(io.BytesIO(res.content))
    assert wb.sheetnames == ["experiences", "peptides"]
    assert wb["experiences"].max_row == 3
    assert wb["peptides"]["A2"].value == "BPC-157"


def test_export_json_and_bad_format(client, db_session):
    moderator, _ = _setup(client, db_session)
    headers = auth_header(moderator["token"])

    res = client.get(f"{API}/analytics/export?type=peptides", headers=headers)
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert list(data) == ["peptides"]
    assert data["peptides"][0]["name"] == "BPC-157"

    bad = client.get(f"{API}/analytics/export?format=pdf", headers=headers)
    assert bad.status_code == 400

    bad_type = client.get(f"{API}/analytics/export?type=votes", headers=headers)
    assert bad_type.status_code == 400
