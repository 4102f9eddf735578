"""Example: call the service layer directly, without Flask.

Controllers stay thin; everything below is what the HTTP endpoints call.
"""

import importlib
import sys

from dotenv import load_dotenv

from workforce_attendance.container import build_container
from workforce_attendance.core.claims import SessionClaims
from workforce_attendance.settings import get_settings_module


def main(organization_id: int = 1, employee_id: int = 1):
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    claims = SessionClaims.from_session({"user_id": employee_id, "organization_id": organization_id})
    print(container.attendance_service.get_today(claims, policy=container.shift_policy))
    print(container.analytics_service.work_analytics(claims, policy=container.shift_policy, range_name="last_30"))


if __name__ == "__main__":
    main(*(int(a) for a in sys.argv[1:3]))
