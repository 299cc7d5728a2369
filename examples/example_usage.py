"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from salary_system.config import load_settings
from salary_system.container import build_container
from salary_system.salaries.model import SalaryFilter


def main():
    container = build_container(settings=load_settings())
    stats = container.salary_service.stats(owner_user_id=1)
    print(stats.to_dict())
    for record in container.salary_service.list(SalaryFilter(owner_user_id=1))[:5]:
        print(record.to_dict())


if __name__ == "__main__":
    main()
