"""HTTP routers for the interview proctor API."""
