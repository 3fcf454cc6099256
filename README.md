# authorhub

A small HTTP service that looks up an author in a MySQL database, together
with the author's articles, and returns them as JSON. It is organised in
layers: plain domain records (`authorhub.domain`), repositories
(`authorhub.repository`), a service that combines them
(`authorhub.usecase`), and a Flask application on top (`authorhub.web`).

The package also carries a set of MySQL client-protocol helpers that stand
on their own: protocol constants, collation lookups, a packet read buffer,
an idle-connection check, compressed-packet framing, connection-attribute
encoding and client-side parameter interpolation.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run pytest.

## Configuration

Settings come from the environment. A `.env` file in the working directory
is read first, if one exists; variables already set in the environment are
not overwritten by it.

| Variable             | Required | Default |
|----------------------|----------|---------|
| `APP_ENV`            | no       | `dev`   |
| `PORT`               | no       | `8080`  |
| `DB_HOST`            | yes      |         |
| `DB_PORT`            | yes      |         |
| `DB_USER`            | yes      |         |
| `DB_PASSWORD`        | yes      |         |
| `DB_NAME`            | yes      |         |
| `DB_TYPE`            | no       | `mysql` |
| `DB_MAX_OPEN_CONNS`  | no       | `10`    |
| `DB_MAX_IDLE_CONNS`  | no       | `5`     |

A missing or empty required variable, or a `DB_PORT` that is not an
integer, raises `authorhub.loader.EnvironmentVariableError`. Optional
integer settings that do not parse fall back to their defaults. `mysql` is
the only `DB_TYPE` that can be opened; any other value gives a
`DatabaseError`.

An example `.env`:

```
DB_HOST=localhost
DB_PORT=3306
DB_USER=user
DB_PASSWORD=password
DB_NAME=authorhub
```

Printing a `Config` masks the database host and user and never shows the
password.

## Running

```
authorhub
```

The command takes no options besides `--help`. It loads the configuration,
opens a connection pool to the database and pings it up to three times,
waiting one second after each failed attempt. If no ping succeeds it logs
the error and exits with status 1. Otherwise it serves the API with Flask's
built-in server on `0.0.0.0` at the configured port.

## API

All routes live under `/v1`.

`GET /v1/ping` answers `200` with:

```json
{"message": "pong", "status": "ok"}
```

`GET /v1/author/<id>` requires the request header `Authorization: secret`.
Without it, or with any other value, the answer is `401` with
`{"error": "Unauthorized"}`. If the lookup fails for any reason the answer
is `404` with `{"error": "Author not found"}`. Otherwise the answer is `200`
with an `author` object (`ID`, `Email`, `Name`, `CreatedAt`, `UpdatedAt`,
times in RFC 3339) and an `articles` list (`ID`, `Title`, `Content`,
`AuthorID`).

## Using the pieces in code

- `authorhub.config.load()` builds a `Config` from the environment;
  `authorhub.loader` holds the `env_*` and `must_env_*` readers.
- `authorhub.database.open_database()` opens a `Database` pool with the
  given `Options`. `Database.connection()` lends a connection as a context
  manager; a `Database` is itself a context manager and closes on exit.
- `authorhub.repository.MySQLAuthorRepository` and
  `MySQLArticleRepository` implement the `AuthorRepository` and
  `ArticleRepository` protocols from `authorhub.domain`.
- `authorhub.usecase.AuthorService` implements `AuthorUsecase`; its
  `get_author_with_articles()` raises `NotFoundError` for an unknown author.
- `authorhub.web.create_app()` builds the Flask application from a
  `UsecaseContainer`, and `require_token()` is the header check it uses.
- `authorhub.main.connection_settings()` turns a `Config` into keyword
  arguments for `pymysql.connect`.

Protocol helpers:

- `authorhub.protocol`: packet markers, capability, command, field-type and
  status flag enums.
- `authorhub.collations`: `collation_id()` and `is_unsafe_collation()`.
- `authorhub.buffer.ReadBuffer`: buffered packet reading and a reusable
  write area.
- `authorhub.conncheck.conn_check()`: non-blocking check of an idle socket.
- `authorhub.compress.CompressedIO`, `z_compress()`, `z_decompress()`:
  compressed packet framing.
- `authorhub.attributes.encode_connection_attributes()` and
  `length_encoded_string()`.
- `authorhub.interpolate.interpolate_params()`, `build_set_statement()` and
  `transaction_statement()`.

Because the service depends only on the repository protocols, it can be
exercised with in-memory repositories and no database at all.

## What it does not do

- Articles are not stored in the database. `MySQLArticleRepository` keeps
  them in the memory of the running process, so they are lost on restart,
  and the HTTP API offers no way to add them.
- The API only reads authors; there are no routes to create or delete
  them, though the repository can.
- The protocol helpers are not a MySQL client. The service talks to the
  database through PyMySQL and does not use them.