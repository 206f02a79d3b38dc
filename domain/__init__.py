"""Describes the voice recipe domain. Centres around answering a transcript.

- A transcript is matched against a small, fixed catalog first.
- Anything the catalog does not know goes to an automation webhook, which
  answers in whatever shape its workflow happens to produce.
- No state survives a request.

Should be able to fake the webhook. It is just HTTP.
"""
