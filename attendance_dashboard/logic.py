from attendance_dashboard.models import RowView

# ==================================================
# Counters
# ==================================================

def count_attendance(records):
    present = sum(1 for r in records if r.is_present)
    return present, len(records) - present

# ==================================================
# Search
# ==================================================

def filter_records(records, search_text):
    if not search_text:
        return records

    term = search_text.lower()
    # contact is compared as typed, only name and uid ignore case
    return tuple(
        r for r in records
        if term in r.name.lower()
        or term in r.uid.lower()
        or term in r.contact
    )

# ==================================================
# Table rows
# ==================================================

def build_rows(records):
    return [
        RowView(
            uid=r.uid,
            name=r.name,
            contact=r.contact,
            attendance=r.attendance,
            status_label="Present" if r.is_present else "Absent",
            avatar_key=r.name
        )
        for r in records
    ]


def remove_record(records, uid):
    return tuple(r for r in records if r.uid != uid)


def find_record(records, uid):
    for r in records:
        if r.uid == uid:
            return r
    return None
