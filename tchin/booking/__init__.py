"""
Booking submission.

Responsibilities:
- Collect the booking form fields for one bar.
- Submit the request to the upstream booking endpoint.
- Track the form through idle, submitting, success and failure.
"""
