"""Request forms."""


def first_error(form):
    """First validation message of a form, for the JSON error body."""
    for messages in form.errors.values():
        if messages:
            return messages[0]
    return 'invalid request'
