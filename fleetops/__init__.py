"""Fleet operations notification service.

Holds the domain model, automated fleet checks and the HTTP gateway used to
surface compliance, maintenance and fuel alerts to fleet staff.
"""
