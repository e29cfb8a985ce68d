#!/usr/bin/env python3

from collections import deque
from flask import Flask, request, Response

app = Flask(__name__)

# Most recent request lines, as (method, path, protocol, host header)
seen = deque(maxlen=100)

# HTML templates
HOME_PAGE = '''<!DOCTYPE html>
<html>
<head>
    <title>Test Server</title>
</head>
<body>
    <h1>Test Server</h1>
    <p>Local server for trying out the raw HTTP client</p>
</body>
</html>
'''

# Well past the client's single read
LARGE_PAGE = '<!DOCTYPE html>\n<html>\n<body>\n' + '<p>filler line</p>\n' * 500 + '</body>\n</html>\n'

@app.before_request
def record():
    seen.append((request.method, request.path,
                 request.environ.get('SERVER_PROTOCOL'), request.headers.get('Host')))

@app.route('/')
def home():
    return HOME_PAGE

@app.route('/large')
def large():
    return LARGE_PAGE

@app.route('/echo')
def echo():
    method, path, protocol, host = seen[-1]
    return Response(f"{method} {path} {protocol}\nHost: {host}\n", mimetype='text/plain')

if __name__ == '__main__':
    print("Starting test server on http://localhost:8000")
    print("Try: build-your-own-curl http://localhost:8000/echo")
    app.run(host='0.0.0.0', port=8000, debug=True)
