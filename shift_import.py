#!/usr/bin/env python3
"""
Shift Roster Pay Calculation Script

This script reads a roster of recorded shifts and sends it to the labor pay
server, then prints the weekly pay breakdown.

Usage:
    python shift_import.py [data_file] [base_url] [--calendar=static|computed]

Requirements:
    - requests library: pip install requests
    - Server running at http://localhost:8000

Data File Format:
    Tab-separated values with columns: Date, Start, End, Daily Salary[, Position, Location]
    Dates may be YYYY-MM-DD or M/D/YYYY.
    Example: 2024-01-02	08:00	16:00	80000	Cajero	Sede Norte
"""

import os
import sys
from datetime import datetime

import requests

# Configuration
BASE_URL = os.getenv("LABORPAY_URL", "http://localhost:8000")
REQUEST_TIMEOUT = 10

HEADERS = {
    "Content-Type": "application/json",
}

def get_sample_data():
    """Return the built-in sample roster (one week of January 2024)"""
    return """2024-01-01	08:00	16:00	80000	Cajero	Sede Norte
2024-01-02	08:00	16:00	80000	Cajero	Sede Norte
2024-01-03	22:00	06:00	80000	Vigilante	Sede Norte
2024-01-04	06:00	18:00	80000	Cajero	Sede Norte
2024-01-05	14:00	23:00	80000	Cajero	Sede Sur
2024-01-07	08:00	16:00	80000	Cajero	Sede Sur"""

def read_data_from_file(filename):
    """Read roster data from file"""
    try:
        with open(filename, 'r', encoding='utf-8') as file:
            return file.read()
    except OSError as e:
        print(f"❌ Error reading file: {e}")
        return None

def parse_date_field(date_str):
    """Normalize YYYY-MM-DD or M/D/YYYY into YYYY-MM-DD"""
    for date_format in ('%Y-%m-%d', '%m/%d/%Y'):
        try:
            return datetime.strptime(date_str, date_format).strftime('%Y-%m-%d')
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date '{date_str}'")

def parse_shift_data(data_content):
    """Parse roster lines into WorkShift payloads. Returns (shifts, errors)."""
    shifts = []
    errors = []

    for line_number, line in enumerate(data_content.strip().split('\n'), 1):
        if not line.strip() or line.lstrip().startswith('#'):
            continue

        parts = [part.strip() for part in line.split('\t')]
        if len(parts) < 4:
            errors.append(f"Line {line_number}: expected at least 4 columns, got {len(parts)}")
            continue

        try:
            shift = {
                "date": parse_date_field(parts[0]),
                "start_time": parts[1].zfill(5),
                "end_time": parts[2].zfill(5),
                "base_salary": float(parts[3].replace(',', '')),
                "position": parts[4] if len(parts) > 4 else "",
                "location": parts[5] if len(parts) > 5 else "",
            }
        except ValueError as e:
            errors.append(f"Line {line_number}: {e}")
            continue

        shifts.append(shift)

    return shifts, errors

def request_weekly_pay(shifts, base_url=BASE_URL, calendar=None):
    """Post the roster to /labor/weekly. Returns (success, result)."""
    url = f"{base_url.rstrip('/')}/labor/weekly"
    params = {"calendar": calendar} if calendar else None

    try:
        response = requests.post(
            url,
            headers=HEADERS,
            json={"shifts": shifts},
            params=params,
            timeout=REQUEST_TIMEOUT
        )

        if response.status_code == 200:
            return True, response.json()
        else:
            return False, f"HTTP {response.status_code}: {response.text}"

    except requests.RequestException as e:
        return False, f"Request error: {e}"

def format_money(amount):
    return f"${amount:,.0f}"

def print_breakdown(result):
    """Print the weekly breakdown returned by the server"""
    print("\n" + "=" * 60)
    print("📊 Weekly Pay Breakdown:")
    for line in result.get("breakdown", []):
        print(
            f"   {line['description']:<34} {line['hours']:>6.2f}h x {format_money(line['rate']):>10}"
            f" = {format_money(line['amount']):>12}"
        )
    print("-" * 60)
    print(f"   Total hours:     {result['total_hours']:.2f}")
    print(f"   Night hours:     {result['night_shift_hours']:.2f}")
    print(f"   Overtime hours:  {result['overtime_hours']:.2f}")
    print(f"   Base pay:        {format_money(result['total_base_pay'])}")
    print(f"   Surcharges:      {format_money(result['total_extra_pay'])}")
    print(f"   Total pay:       {format_money(result['total_pay'])}")

def main():
    """Main calculation process"""
    args = [arg for arg in sys.argv[1:] if not arg.startswith('--')]
    calendar = None
    for arg in sys.argv[1:]:
        if arg.startswith('--calendar='):
            calendar = arg.split('=', 1)[1]

    filename = args[0] if args else None
    base_url = args[1] if len(args) > 1 else BASE_URL

    # Step 1: Get data content
    if filename and filename.lower() != 'sample':
        print(f"\n📋 Step 1: Reading roster from {filename}...")
        data_content = read_data_from_file(filename)
        if not data_content:
            print("❌ Aborted - could not read file")
            sys.exit(1)
    else:
        print("\n📋 Step 1: Using built-in sample roster...")
        data_content = get_sample_data()

    # Step 2: Parse roster
    print("\n📋 Step 2: Parsing roster...")
    shifts, errors = parse_shift_data(data_content)
    for error in errors:
        print(f"⚠️  {error}")
    print(f"✅ Parsed {len(shifts)} shifts")

    if not shifts:
        print("❌ No valid shifts found in data")
        sys.exit(1)

    # Step 3: Calculate
    print(f"\n📋 Step 3: Requesting weekly pay from {base_url}...")
    success, result = request_weekly_pay(shifts, base_url, calendar)
    if not success:
        print(f"❌ Calculation failed: {result}")
        sys.exit(1)

    print_breakdown(result)

if __name__ == "__main__":
    main()
