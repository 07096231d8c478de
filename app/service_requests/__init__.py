"""
Service requests app.

A customer (requester) asks for a service, a mechanic accepts it, and the
request moves through its lifecycle until it is completed or cancelled.

This app handles:
- The ServiceRequest model and its status/payment status
- The database-change webhook that notifies the other party when a
  request is cancelled

Related apps:
    - notifications: Push delivery for the cancellation notice
    - payments: Marks requests as paid after a chargeable source
"""
