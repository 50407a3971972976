import random
import re
from datetime import datetime

from staffdesk.client.ids import generate_employee_id, generate_simple_employee_id, is_employee_id_unique

NOW = datetime(2024, 5, 1, 9, 30, 15)


def test_employee_id_encodes_date_time_and_initials():
    employee_id = generate_employee_id("ivan", "Petrov", "Sergeevich", now=NOW, rng=random.Random(1))

    assert re.fullmatch(r"EMP-240501-093015-PIS-\d{2}", employee_id)


def test_employee_id_without_middle_name_uses_two_initials():
    employee_id = generate_employee_id("Анна", "Иванова", now=NOW)

    assert employee_id.startswith("EMP-240501-093015-ИА-")


def test_simple_employee_id_uses_base36_millis():
    employee_id = generate_simple_employee_id("Anna", "Ivanova", now=NOW)
    prefix, initials, stamp = employee_id.split("-")

    assert prefix == "EMP"
    assert initials == "IA"
    assert int(stamp, 36) == int(NOW.timestamp() * 1000)


def test_uniqueness_check():
    assert is_employee_id_unique("EMP-1", ["EMP-2"])
    assert not is_employee_id_unique("EMP-1", ["EMP-1", "EMP-2"])
