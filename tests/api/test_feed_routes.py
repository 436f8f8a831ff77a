"""Home feeds over HTTP.

Invariants:
    - Feeds are open to anonymous callers; a bad token reads as anonymous
    - Every entry carries objectType and the camelCase view of its entity
"""

import pytest


async def _signup(client, email, name):
    res = await client.post("/user.create", json={"email": email, "password": "lovelace1", "name": name})
    return res.json()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def charities(client):
    """Two charities with a campaign each; Trees also has an update and a post."""
    trees = await _signup(client, "trees@example.org", "Trees Admin")
    rivers = await _signup(client, "rivers@example.org", "Rivers Admin")
    trees_charity = (await client.post("/charity.create", json={"name": "Trees"}, headers=_auth(trees["token"]))).json()
    rivers_charity = (await client.post("/charity.create", json={"name": "Rivers"}, headers=_auth(rivers["token"]))).json()
    spring = (await client.post("/campaign.create", json={"name": "Spring"}, headers=_auth(trees["token"]))).json()
    news = (await client.post("/update.create", json={"name": "News"}, headers=_auth(trees["token"]))).json()
    delta = (await client.post("/campaign.create", json={"name": "Delta"}, headers=_auth(rivers["token"]))).json()
    post = (
        await client.post(
            "/post.create",
            json={"campaign": spring["campaign"]["guid"], "caption": "Planted"},
            headers=_auth(trees["token"]),
        )
    ).json()
    return {
        "trees": trees_charity["charity"],
        "rivers": rivers_charity["charity"],
        "spring": spring["campaign"],
        "news": news["update"],
        "delta": delta["campaign"],
        "post": post["post"],
    }


async def test_anonymous_causes_feed_lists_everything(client, charities):
    res = await client.post("/list.causesFeed", json={})

    assert res.status_code == 200
    feed = res.json()["causesFeed"]
    assert [(row["objectType"], row["guid"]) for row in feed] == [
        ("campaign", charities["spring"]["guid"]),
        ("update", charities["news"]["guid"]),
        ("campaign", charities["delta"]["guid"]),
    ]
    assert feed[1]["charityName"] == "Trees"


async def test_signed_in_causes_feed_follows_charities(client, charities):
    fan = await _signup(client, "fan@example.org", "Fan")
    await client.post("/charity.follow", json={"guid": charities["rivers"]["guid"]}, headers=_auth(fan["token"]))

    res = await client.post("/list.causesFeed", json={}, headers=_auth(fan["token"]))

    assert [row["guid"] for row in res.json()["causesFeed"]] == [charities["delta"]["guid"]]


async def test_bad_token_reads_as_anonymous(client, charities):
    res = await client.post("/list.causesFeed", json={"pageSize": 1}, headers=_auth("garbage"))

    assert res.status_code == 200
    assert [row["guid"] for row in res.json()["causesFeed"]] == [charities["spring"]["guid"]]


async def test_people_feed_shows_donations_and_posts(client, charities):
    donor = await _signup(client, "donor@example.org", "Donor")
    headers = _auth(donor["token"])
    await client.post("/user.deposit", json={"amount": 100}, headers=headers)
    donation = (
        await client.post("/donation.create", json={"amount": 25, "charity": charities["trees"]["guid"]}, headers=headers)
    ).json()["donation"]

    res = await client.post("/list.peopleFeed", json={"sort": "desc"})

    feed = res.json()["peopleFeed"]
    assert [(row["objectType"], row["guid"]) for row in feed] == [
        ("donation", donation["guid"]),
        ("post", charities["post"]["guid"]),
    ]
    assert feed[0]["amount"] == 25
    assert feed[0]["userName"] == "Donor"
    assert feed[1]["caption"] == "Planted"
