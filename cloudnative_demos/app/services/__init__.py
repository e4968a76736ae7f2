"""
Service layer abstraction.

Each service encapsulates the logic of one demo.  Services receive
their collaborators (session store, configuration source) at
construction time so that the API handlers never reach for global
state.
"""
