"""Storefront load testing: Locust entry point.

Imports every user class so Locust discovers them. Pick a subset by class name.

Usage:
    # All users (web UI):
    locust -f loadtests/locustfile.py

    # Shoppers only, headless:
    locust -f loadtests/locustfile.py ShopperUser --headless -u 50 -r 5 -t 300s --csv=results/loadtest

    # Back office traffic needs an administrator:
    STOREFRONT_ADMIN_ID=<id from manage.py create-admin> locust -f loadtests/locustfile.py BackOfficeUser
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.back_office import BackOfficeUser  # noqa: F401
from loadtests.scenarios.browsing import BrowsingUser  # noqa: F401
from loadtests.scenarios.shopping import ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log the API's error message for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, extract_error_detail(response))


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}\n")


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the storefront's dashboard figures once the run ends, when an admin id is configured."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    admin_id = environment.parsed_options and getattr(environment.parsed_options, "admin_id", None)
    if not admin_id:
        return
    try:
        resp = requests.get(f"{environment.host}/admin/dashboard", headers={"X-User-Id": admin_id}, timeout=5)
        resp.raise_for_status()
    except requests.RequestException as exc:
        print(f"[LOADTEST] Could not fetch dashboard metrics: {exc}\n")
        return
    print("\n[LOADTEST] Final dashboard metrics:")
    for key, value in resp.json()["metrics"].items():
        print(f"  {key}: {value}")
    print()


@events.init_command_line_parser.add_listener
def add_admin_option(parser):
    parser.add_argument(
        "--admin-id",
        type=str,
        env_var="STOREFRONT_ADMIN_ID",
        default="",
        help="Administrator id used by BackOfficeUser and the end-of-run dashboard summary",
    )
