"""
Helpers for driving a table through whole rounds in tests.
"""


def act(table, action, amount=None):
    """Apply an action for the current actor and pass the turn."""
    seat_id = table.current_actor_id()
    record = table.apply_action(seat_id, action, amount)
    table.advance_actor()
    return record


def play_round_with_calls(table):
    """Check or call until the betting round is complete."""
    while not table.is_round_complete():
        seat_id = table.current_actor_id()
        if table.to_call(seat_id):
            table.apply_action(seat_id, "CALL")
        else:
            table.apply_action(seat_id, "CHECK")
        table.advance_actor()
