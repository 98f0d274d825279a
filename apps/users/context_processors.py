def request_context(request):
    """Exposes the RequestContext to templates as `ctx`."""
    return {'ctx': getattr(request, 'ctx', None)}
