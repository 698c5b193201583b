"""Express application sources: app.js, bin/www, routes, static index.

``$decl`` is the declaration keyword: ``var`` in ES5 mode, ``const`` otherwise.
"""
from __future__ import annotations

from string import Template
from typing import Optional

WWW = Template('''\
#!/usr/bin/env node

/**
 * Module dependencies.
 */

$decl app = require('../app');
$decl debug = require('debug')('$name:server');
$decl http = require('http');

/**
 * Get port from environment and store in Express.
 */

$decl port = normalizePort(process.env.PORT || '3000');
app.set('port', port);

/**
 * Create HTTP server.
 */

$decl server = http.createServer(app);

/**
 * Listen on provided port, on all network interfaces.
 */

server.listen(port);
server.on('error', onError);
server.on('listening', onListening);

/**
 * Normalize a port into a number, string, or false.
 */

function normalizePort(val) {
  $decl port = parseInt(val, 10);

  if (isNaN(port)) {
    // named pipe
    return val;
  }

  if (port >= 0) {
    // port number
    return port;
  }

  return false;
}

/**
 * Event listener for HTTP server "error" event.
 */

function onError(error) {
  if (error.syscall !== 'listen') {
    throw error;
  }

  $decl bind = typeof port === 'string'
    ? 'Pipe ' + port
    : 'Port ' + port;

  // handle specific listen errors with friendly messages
  switch (error.code) {
    case 'EACCES':
      console.error(bind + ' requires elevated privileges');
      process.exit(1);
      break;
    case 'EADDRINUSE':
      console.error(bind + ' is already in use');
      process.exit(1);
      break;
    default:
      throw error;
  }
}

/**
 * Event listener for HTTP server "listening" event.
 */

function onListening() {
  $decl addr = server.address();
  $decl bind = typeof addr === 'string'
    ? 'pipe ' + addr
    : 'port ' + addr.port;
  debug('Listening on ' + bind);
}
''')

ROUTES_INDEX = Template('''\
$decl express = require('express');
$decl router = express.Router();

/* GET home page. */
router.get('/', function(req, res, next) {
  res.render('index', { title: 'Express' });
});

module.exports = router;
''')

ROUTES_USERS = Template('''\
$decl express = require('express');
$decl router = express.Router();

/* GET users listing. */
router.get('/', function(req, res, next) {
  res.send('respond with a resource');
});

module.exports = router;
''')

INDEX_HTML = '''\
<html>

<head>
  <title>Express</title>
  <link rel="stylesheet" href="/stylesheets/style.css">
</head>

<body>
  <h1>Express</h1>
  <p>Welcome to Express</p>
</body>

</html>
'''

GITIGNORE = '''\
# Logs
logs
*.log
npm-debug.log*

# Runtime data
pids
*.pid
*.seed
*.pid.lock

# Directory for instrumented libs generated by jscoverage/JSCover
lib-cov

# Coverage directory used by tools like istanbul
coverage

# nyc test coverage
.nyc_output

# Grunt intermediate storage (http://gruntjs.com/creating-plugins#storing-task-files)
.grunt

# node-waf configuration
.lock-wscript

# Compiled binary addons (http://nodejs.org/api/addons.html)
build/Release

# Dependency directories
node_modules
jspm_packages

# Optional npm cache directory
.npm

# Optional REPL history
.node_repl_history
'''

# Per CSS engine: (variable, module, middleware expression)
CSS_MIDDLEWARE: dict[str, tuple[str, str, str]] = {
    "less": (
        "lessMiddleware", "less-middleware",
        "lessMiddleware(path.join(__dirname, 'public'))",
    ),
    "stylus": (
        "stylus", "stylus",
        "stylus.middleware(path.join(__dirname, 'public'))",
    ),
    "compass": (
        "compass", "node-compass",
        "compass({ mode: 'expanded' })",
    ),
    "sass": (
        "sassMiddleware", "node-sass-middleware",
        "sassMiddleware({\n"
        "  src: path.join(__dirname, 'public'),\n"
        "  dest: path.join(__dirname, 'public'),\n"
        "  indentedSyntax: true, // true = .sass and false = .scss\n"
        "  sourceMap: true\n"
        "})",
    ),
}

# Engines that need an explicit app.engine() registration.
VIEW_ENGINE_SETUP: dict[str, tuple[str, str, str]] = {
    "dust": ("adaro", "adaro", "app.engine('dust', adaro.dust());"),
}


def render_www(name: str, es5: bool = False) -> str:
    return WWW.substitute(decl=_decl(es5), name=name)


def render_routes(es5: bool = False) -> dict[str, str]:
    decl = _decl(es5)
    return {
        "index.js": ROUTES_INDEX.substitute(decl=decl),
        "users.js": ROUTES_USERS.substitute(decl=decl),
    }


def render_app(view: Optional[str], css: Optional[str], es5: bool = False) -> str:
    """Render app.js for the given view engine (None = static) and CSS engine."""
    decl = _decl(es5)
    modules: dict[str, str] = {}
    uses = [
        "logger('dev')",
        "express.json()",
        "express.urlencoded({ extended: false })",
        "cookieParser()",
    ]
    if css:
        variable, module, middleware = CSS_MIDDLEWARE[css]
        modules[variable] = module
        uses.append(middleware)
    uses.append("express.static(path.join(__dirname, 'public'))")

    engine_setup = None
    if view in VIEW_ENGINE_SETUP:
        variable, module, engine_setup = VIEW_ENGINE_SETUP[view]
        modules[variable] = module

    lines: list[str] = []
    if view:
        lines.append(f"{decl} createError = require('http-errors');")
    lines += [
        f"{decl} express = require('express');",
        f"{decl} path = require('path');",
        f"{decl} cookieParser = require('cookie-parser');",
        f"{decl} logger = require('morgan');",
    ]
    lines += [f"{decl} {var} = require('{modules[var]}');" for var in sorted(modules)]
    lines += [
        "",
        f"{decl} indexRouter = require('./routes/index');",
        f"{decl} usersRouter = require('./routes/users');",
        "",
        f"{decl} app = express();",
        "",
    ]

    if view:
        lines.append("// view engine setup")
        if engine_setup:
            lines.append(engine_setup)
        lines += [
            "app.set('views', path.join(__dirname, 'views'));",
            f"app.set('view engine', '{view}');",
            "",
        ]

    lines += [f"app.use({use});" for use in uses]
    lines += [
        "",
        "app.use('/', indexRouter);",
        "app.use('/users', usersRouter);",
        "",
    ]

    if view:
        lines += [
            "// catch 404 and forward to error handler",
            "app.use(function(req, res, next) {",
            "  next(createError(404));",
            "});",
            "",
            "// error handler",
            "app.use(function(err, req, res, next) {",
            "  // set locals, only providing error in development",
            "  res.locals.message = err.message;",
            "  res.locals.error = req.app.get('env') === 'development' ? err : {};",
            "",
            "  // render the error page",
            "  res.status(err.status || 500);",
            "  res.render('error');",
            "});",
            "",
        ]

    lines.append("module.exports = app;")
    return "\n".join(lines) + "\n"


def _decl(es5: bool) -> str:
    return "var" if es5 else "const"
