"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags counters     # Concurrent adds against one event
  locust -f locustfile.py --tags throughput   # Test cache
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from locust import HttpUser, task, between, tag, events
from datetime import date, timedelta

API = "/api"

# Shared state
EVENT_IDS = []
COUNTER_EVENT_ID = None

RSVP_STATUSES = ["pending", "confirmed", "declined"]
VENDOR_CATEGORIES = ["venue", "catering", "decorations", "entertainment", "photography", "florist"]


def random_name(prefix="Guest"):
    return f"{prefix} " + "".join(random.choices(string.ascii_lowercase, k=6)).title()


def random_email():
    return f"load_{random.randint(10000, 99999)}@test.com"


def event_payload(name=None):
    return {
        "name": name or f"Event {random.randint(1, 10000)}",
        "date": (date.today() + timedelta(days=random.randint(1, 90))).isoformat(),
        "time": "7:00 PM",
        "location": "Venue",
        "budget": random.randint(500, 20000),
    }


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: guest/vendor counter test event is created by the first user")
    print("=" * 60)


class CounterUser(HttpUser):
    """
    TEST 1: Counters - many users add guests to the same event

    Run: locust -f locustfile.py --tags counters -u 100 -r 50 --run-time 30s

    After test, compare:
      SELECT guest_count FROM events WHERE id = X;
      SELECT COUNT(*) FROM guests WHERE event_id = X;
    Concurrent recounts can leave guest_count behind until the next add or delete.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        global COUNTER_EVENT_ID
        if not COUNTER_EVENT_ID:
            resp = self.client.post(f"{API}/events", json=event_payload("Counter Test Event"))
            if resp.status_code == 201:
                COUNTER_EVENT_ID = resp.json()["data"]["id"]
                print(f"\n✓ Created event {COUNTER_EVENT_ID} for counter test\n")

    @tag("counters")
    @task(5)
    def add_guest(self):
        if not COUNTER_EVENT_ID:
            return
        with self.client.post(f"{API}/guests",
            json={
                "eventId": COUNTER_EVENT_ID,
                "name": random_name(),
                "email": random_email(),
                "plusOne": random.random() < 0.3,
            },
            name=f"{API}/guests",
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")

    @tag("counters")
    @task(2)
    def add_vendor(self):
        if not COUNTER_EVENT_ID:
            return
        self.client.post(f"{API}/vendors",
            json={
                "eventId": COUNTER_EVENT_ID,
                "name": random_name("Vendor"),
                "category": random.choice(VENDOR_CATEGORIES),
                "phone": "555-0100",
                "quotedPrice": random.randint(100, 5000),
            },
            name=f"{API}/vendors")

    @tag("counters")
    @task(1)
    def read_stats(self):
        if COUNTER_EVENT_ID:
            self.client.get(f"{API}/events/{COUNTER_EVENT_ID}/stats", name=f"{API}/events/{{id}}/stats")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false, run again

    Compare:
      - Avg response time
      - Requests/sec
      - P95/P99 latency
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_events_cached(self):
        status = random.choice([None, "planning", "confirmed"])
        params = {"status": status} if status else {}
        resp = self.client.get(f"{API}/events", params=params, name=f"{API}/events [cached]")
        if resp.status_code == 200:
            for event in resp.json().get("data", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("throughput", "read")
    @task(3)
    def get_event_details(self):
        if EVENT_IDS:
            event_id = random.choice(EVENT_IDS)
            self.client.get(f"{API}/events/{event_id}/details", name=f"{API}/events/{{id}}/details")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_event(self):
        with self.client.post(f"{API}/guests",
            json={"eventId": 999999, "name": "Nobody"},
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def malformed_event_id(self):
        with self.client.get(f"{API}/events/not-an-id", name=f"{API}/events/[bad id]", catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def negative_budget(self):
        payload = event_payload()
        payload["budget"] = -5
        with self.client.post(f"{API}/events", json=payload, catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def rating_out_of_range(self):
        with self.client.post(f"{API}/vendors",
            json={"eventId": 1, "name": "Too Good", "category": "venue", "phone": "1", "rating": 7},
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 404])

    @tag("edge")
    @task
    def invalid_rsvp(self):
        with self.client.patch(f"{API}/guests/1/rsvp",
            json={"rsvpStatus": "maybe"},
            name=f"{API}/guests/{{id}}/rsvp",
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 404])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(f"{API}/events",
            data="not json at all",
            headers={"Content-Type": "application/json"},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly browsing events and guest lists
      - Some RSVP changes and guest adds
      - Rare event creates
    """
    wait_time = between(1, 3)

    @task(40)
    def browse_events(self):
        resp = self.client.get(f"{API}/events?upcoming=true")
        if resp.status_code == 200:
            for event in resp.json().get("data", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_guests(self):
        if EVENT_IDS:
            self.client.get(f"{API}/guests/event/{random.choice(EVENT_IDS)}", name=f"{API}/guests/event/{{id}}")

    @task(10)
    def change_rsvp(self):
        if not EVENT_IDS:
            return
        resp = self.client.get(f"{API}/guests/event/{random.choice(EVENT_IDS)}", name=f"{API}/guests/event/{{id}}")
        guests = resp.json().get("data", []) if resp.status_code == 200 else []
        if guests:
            self.client.patch(f"{API}/guests/{random.choice(guests)['id']}/rsvp",
                json={"rsvpStatus": random.choice(RSVP_STATUSES)},
                name=f"{API}/guests/{{id}}/rsvp")

    @task(10)
    def add_guest(self):
        if EVENT_IDS:
            self.client.post(f"{API}/guests",
                json={"eventId": random.choice(EVENT_IDS), "name": random_name()})

    @task(3)
    def create_event(self):
        resp = self.client.post(f"{API}/events", json=event_payload())
        if resp.status_code == 201:
            EVENT_IDS.append(resp.json()["data"]["id"])
