"""
Projections: pure functions recomputed on demand from store snapshots.

- urgency.py: due date -> Overdue / Due soon / Normal
- board.py: filter + partition into workflow columns
- calendar_view.py: month grid bucketed by due date
- timesheet.py: trailing 7-day activity for one identity
- feedback_list.py: feedback ordering and edit rights
"""
