"""
services - Business-logic layer sitting between API/UI and DB.

Each service method takes a Session first and either returns plain
data or raises ValidationError; services.actions.run_action wraps a
call into the {data, error} result the pages consume.
"""
