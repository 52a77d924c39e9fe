from .seen import render_seen_list


def seen_products(request):
    # Templates call the function only when they show the section
    return {'seen_products_html': lambda: render_seen_list(request)}
