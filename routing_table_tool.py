#!/usr/bin/env python3
"""
Routing table helper for the state_area_codes lookup database
"""

import csv
import sys
import logging

from shared.database import LookupSessionLocal, init_lookup_table
from apps.call_routing.area_code import extract_area_code
from apps.call_routing.models import StateAreaCode
from apps.call_routing.routing_table import RoutingTable

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("State", "AreaCodes", "Extension")


def show_rules(session_factory=LookupSessionLocal):
    """Print every rule in table order"""
    table = RoutingTable(session_factory)
    try:
        rules = table.load_rules()
    except Exception as e:
        print(f"Failed to read routing table: {e}")
        return False

    if not rules:
        print("No routing rules found")
        return True

    print("\nRouting Rules:")
    print("=" * 60)
    for i, rule in enumerate(rules, 1):
        print(f"{i:3d}. {rule.state or '-':<20} ext {rule.extension or '-':<8} {', '.join(rule.area_codes)}")
    return True


def import_rules(csv_path, session_factory=LookupSessionLocal):
    """Append rows from a CSV with State,AreaCodes,Extension headers"""
    try:
        with open(csv_path, newline="") as f:
            reader = csv.DictReader(f)
            missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                print(f"CSV is missing columns: {', '.join(missing)}")
                return 0
            rows = [
                StateAreaCode(
                    state=row["State"].strip(),
                    area_codes=row["AreaCodes"].strip(),
                    extension=row["Extension"].strip(),
                )
                for row in reader
            ]
    except OSError as e:
        print(f"Failed to read {csv_path}: {e}")
        return 0

    db = session_factory()
    try:
        db.add_all(rows)
        db.commit()
    except Exception as e:
        db.rollback()
        print(f"Failed to import rules: {e}")
        return 0
    finally:
        db.close()

    print(f"Imported {len(rows)} rules from {csv_path}")
    return len(rows)


def lookup_number(number, session_factory=LookupSessionLocal):
    """Show how a caller number would be routed"""
    area_code = extract_area_code(number)
    print(f"Caller number: {number}")
    print(f"Area code:     {area_code or '(none)'}")

    rule = RoutingTable(session_factory).resolve(area_code)
    if rule is None:
        print("Result:        no match, PBX falls back to failover")
    else:
        print(f"Result:        {rule.state} -> extension {rule.extension}")
    return rule


def main():
    """Main function"""
    if len(sys.argv) < 2:
        print("Routing Table Tool")
        print("=" * 40)
        print("Usage:")
        print("  python routing_table_tool.py list              - List routing rules")
        print("  python routing_table_tool.py import <csv>      - Import rules from CSV")
        print("  python routing_table_tool.py lookup <number>   - Resolve a caller number")
        print()
        print("Examples:")
        print("  python routing_table_tool.py import statescodes.csv")
        print("  python routing_table_tool.py lookup +14155551234")
        return

    command = sys.argv[1].lower()

    if command == "list":
        show_rules()

    elif command == "import":
        if len(sys.argv) < 3:
            print("Please specify a CSV file")
            return
        if not init_lookup_table():
            print("Could not create the routing table")
            return
        import_rules(sys.argv[2])

    elif command == "lookup":
        if len(sys.argv) < 3:
            print("Please specify a caller number")
            return
        lookup_number(sys.argv[2])

    else:
        print(f"Unknown command: {command}")
        print("Use 'python routing_table_tool.py' to see usage")


if __name__ == "__main__":
    main()
