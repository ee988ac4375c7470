"""Notifications API 통합 테스트"""
import pytest

from app.models import Notification


@pytest.mark.asyncio
async def test_notifications_lifecycle(client, test_db_session):
    first = Notification(type="system", title="Maintenance", message="Tonight 10pm")
    second = Notification(type="student", title="New Student", message="Registered")
    test_db_session.add_all([first, second])
    await test_db_session.commit()

    listed = await client.get("/notifications")
    assert listed.status_code == 200
    data = listed.json()
    assert [n["title"] for n in data] == ["New Student", "Maintenance"]
    assert all(n["isRead"] is False and n["link"] == "#" for n in data)

    read = await client.put(f"/notifications/{first.id}/read")
    assert read.json() == {"success": True}

    deleted = await client.delete(f"/notifications/{second.id}")
    assert deleted.json() == {"success": True}

    remaining = (await client.get("/notifications")).json()
    assert len(remaining) == 1
    assert remaining[0]["isRead"] is True


@pytest.mark.asyncio
async def test_notification_not_found(client):
    assert (await client.put("/notifications/999/read")).status_code == 404
    assert (await client.delete("/notifications/999")).status_code == 404
