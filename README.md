# troutwsgi

An opinionated URL router for WSGI applications, built on a simple trie.

URL templates are deliberately basic: each `/`-separated piece is either a
literal, which must match exactly, or a `{parameter}`, which matches any single
piece. There are no regular expressions and no other constraints on what a
parameter may hold.

The router tells a *404 Not Found* (no endpoint or prefix matches the path)
apart from a *405 Method Not Allowed* (something matches the path but has no
handler for the request method). The methods a route has handlers for are
recorded for the handler to read, so `OPTIONS` responses can be accurate.

## Installation

```
pip install troutwsgi
```

The package has no dependencies outside the standard library.

## Usage

```python
from troutwsgi.router import Router, request_vars


def show_comment(environ, start_response):
    params = request_vars(environ)
    body = f"post {params['Slug'][0]}, comment {params['Id'][0]}".encode()
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [body]


def list_posts(environ, start_response):
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [b"all posts"]


router = Router()

# Matches /posts/FOO/comments/BAR for any HTTP method.
router.endpoint("/posts/{slug}/comments/{id}").handler(show_comment)

# Matches /posts for GET and POST only; other methods get a 405.
router.endpoint("/posts").methods("GET", "POST").handler(list_posts)

# Matches /static and anything beneath it.
router.prefix("/static").handler(list_posts)
```

A `Router` is a WSGI application, so it can be handed to any WSGI server:

```python
from wsgiref.simple_server import make_server

make_server("localhost", 8000, router).serve_forever()
```

### Endpoints and prefixes

* `Router.endpoint(template)` returns an `Endpoint`, which matches only paths
  with exactly as many pieces as the template.
* `Router.prefix(template)` returns a `Prefix`, which matches paths that start
  with the template, whatever follows.

Calling `endpoint` or `prefix` again with the same template returns an object
for the same route, so handlers can be added to it piece by piece.

When several routes could match a path, a route with a handler for the request
method always wins over one without. Beyond that, static pieces score higher
than parameter or prefix pieces, and pieces earlier in the path count for more
than later ones.

### Handlers and methods

Handlers are WSGI applications: callables taking `(environ, start_response)`.

* `.handler(app)` sets the default application, used for any method that has
  no application of its own.
* `.methods("GET", "PUT").handler(app)` sets the application for those methods
  only; they take precedence over the default.

`Endpoint.method_names` and `Prefix.method_names` list the methods the route
has handlers for. A default handler appears there as `"*"`.

### Middleware

A middleware is a callable that takes a WSGI application and returns one.
Middleware given as `A, B, C` wraps the handler as `A(B(C(handler)))`.

```python
router.set_middleware(log_requests, add_headers)   # wraps every request
router.endpoint("/admin").middleware(require_login).handler(admin)
router.endpoint("/items").methods("POST").middleware(check_body).handler(create)
```

`Endpoint.middleware`, `Prefix.middleware` and `Methods.middleware` return the
object they were called on, so calls can be chained. Route middleware given
with `.middleware(...)` wraps the default handler; middleware on a `Methods`
object wraps the handler for those methods.

Router middleware runs first, then route middleware, then the handler. Router
middleware also wraps the 404 and 405 applications.

### Request information

While routing, the router records what it found in the WSGI environ:

* `request_vars(environ)` returns a dict mapping each template parameter, with
  its name in canonical header form (`id` becomes `Id`), to the list of its
  values in template order. A name used twice in a template has two values.
* `environ["trout.path_values"]` maps each parameter name, as written in the
  template, to its last value.
* `environ["trout.methods"]` is the list of methods the matched route has
  handlers for; `environ["HTTP_TROUT_METHODS"]` holds them joined by `", "`.
* `environ["trout.pattern"]` and `environ["HTTP_TROUT_PATTERN"]` hold the
  template that matched, such as `/posts/{slug}` or `/static::prefix`, with the
  router's prefix in front.
* `environ["trout.timer"]` holds how long routing took, in nanoseconds, as a
  string.

`Router.get_handler(environ)` does the routing and records this information
without calling the handler it returns.

### Not found and method not allowed

Pass your own WSGI applications to replace the defaults:

```python
router = Router(handle_404=my_not_found, handle_405=my_not_allowed)
```

The defaults, `default_404` and `default_405`, answer with a short plain-text
body. `default_405` also sets an `Allow` header listing the methods the matched
route has handlers for.

### Mounting under a prefix

If the router receives paths that start with a part it should ignore, such as
`/api`, tell it so:

```python
router.set_prefix("/api")
```

That part is removed from `PATH_INFO` before matching and is put back in front
of the recorded pattern.

### The trie

`troutwsgi.trie` holds the data structure behind the router: `Key`, `Node` and
`Trie`, with the functions `find_nodes`, `path_vars` and `path_string`.
`troutwsgi.endpoints.keys_from_string` turns a template into its keys.

## What it does not do

troutwsgi is a routing library only. It has no command, no server of its own
and no request or response objects: it hands WSGI environs to the WSGI
applications you register. Routes are meant to be set up before the router
starts serving; adding them while requests are being routed is not supported.