"""Run CI chores locally: render markdown and sign off commits."""
