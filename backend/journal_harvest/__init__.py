"""Journal harvest queue producer.

Routes a journal to the harvest message for its configured system (OJS OAI,
Teckiz, DOAJ) and publishes it to SQS for the harvesting worker.
"""
