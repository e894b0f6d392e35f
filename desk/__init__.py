"""Front-desk app: token queues, pharmacy stock, emergency alerts and
the activity feed, plus the push channel that keeps displays current.
"""
