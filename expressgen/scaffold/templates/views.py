"""View templates, one FILES dict per engine (file name -> content)."""
from __future__ import annotations

_JADE_LAYOUT = """\
doctype html
html
  head
    title= title
    link(rel='stylesheet', href='/stylesheets/style.css')
  body
    block content
"""

_JADE_INDEX = """\
extends layout

block content
  h1= title
  p Welcome to #{title}
"""

_JADE_ERROR = """\
extends layout

block content
  h1= message
  h2= error.status
  pre #{error.stack}
"""

DUST = {
    "index.dust": """\
<!DOCTYPE html>
<html>
  <head>
    <title>{title}</title>
    <link rel='stylesheet' href='/stylesheets/style.css' />
  </head>
  <body>
    <h1>{title}</h1>
    <p>Welcome to {title}</p>
  </body>
</html>
""",
    "error.dust": """\
<h1>{message}</h1>
<h2>{error.status}</h2>
<pre>{error.stack}</pre>
""",
}

EJS = {
    "index.ejs": """\
<!DOCTYPE html>
<html>
  <head>
    <title><%= title %></title>
    <link rel='stylesheet' href='/stylesheets/style.css' />
  </head>
  <body>
    <h1><%= title %></h1>
    <p>Welcome to <%= title %></p>
  </body>
</html>
""",
    "error.ejs": """\
<h1><%= message %></h1>
<h2><%= error.status %></h2>
<pre><%= error.stack %></pre>
""",
}

HBS = {
    "layout.hbs": """\
<!DOCTYPE html>
<html>
  <head>
    <title>{{title}}</title>
    <link rel='stylesheet' href='/stylesheets/style.css' />
  </head>
  <body>
    {{{body}}}
  </body>
</html>
""",
    "index.hbs": """\
<h1>{{title}}</h1>
<p>Welcome to {{title}}</p>
""",
    "error.hbs": """\
<h1>{{message}}</h1>
<h2>{{error.status}}</h2>
<pre>{{error.stack}}</pre>
""",
}

HJS = {
    "index.hjs": """\
<!DOCTYPE html>
<html>
  <head>
    <title>{{ title }}</title>
    <link rel='stylesheet' href='/stylesheets/style.css' />
  </head>
  <body>
    <h1>{{ title }}</h1>
    <p>Welcome to {{ title }}</p>
  </body>
</html>
""",
    "error.hjs": """\
<h1>{{ message }}</h1>
<h2>{{ error.status }}</h2>
<pre>{{ error.stack }}</pre>
""",
}

JADE = {
    "layout.jade": _JADE_LAYOUT,
    "index.jade": _JADE_INDEX,
    "error.jade": _JADE_ERROR,
}

# pug is the renamed jade; the syntax used here is identical.
PUG = {
    "layout.pug": _JADE_LAYOUT,
    "index.pug": _JADE_INDEX,
    "error.pug": _JADE_ERROR,
}

TWIG = {
    "layout.twig": """\
<!DOCTYPE html>
<html>
  <head>
    <title>{{ title }}</title>
    <link rel='stylesheet' href='/stylesheets/style.css' />
  </head>
  <body>
    {% block body %}{% endblock %}
  </body>
</html>
""",
    "index.twig": """\
{% extends 'layout.twig' %}

{% block body %}
  <h1>{{title}}</h1>
  <p>Welcome to {{title}}</p>
{% endblock %}
""",
    "error.twig": """\
{% extends 'layout.twig' %}

{% block body %}
  <h1>{{message}}</h1>
  <h2>{{error.status}}</h2>
  <pre>{{error.stack}}</pre>
{% endblock %}
""",
}

VASH = {
    "layout.vash": """\
<!DOCTYPE html>
<html>
  <head>
    <title>@model.title</title>
    <link rel='stylesheet' href='/stylesheets/style.css' />
  </head>
  <body>
    @html.block('content')
  </body>
</html>
""",
    "index.vash": """\
@html.extend('layout', function(model){
  @html.block('content', function(model){
    <h1>@model.title</h1>
    <p>Welcome to @model.title</p>
  })
})
""",
    "error.vash": """\
@html.extend('layout', function(model){
  @html.block('content', function(model){
    <h1>@model.message</h1>
    <h2>@model.error.status</h2>
    <pre>@model.error.stack</pre>
  })
})
""",
}

FILES: dict[str, dict[str, str]] = {
    "dust": DUST,
    "ejs": EJS,
    "hbs": HBS,
    "hjs": HJS,
    "jade": JADE,
    "pug": PUG,
    "twig": TWIG,
    "vash": VASH,
}
