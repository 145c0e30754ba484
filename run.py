# Contact intake backend - local entry point
# In production use a WSGI server, e.g. `gunicorn "intake:create_app()"`

from intake import create_app

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=app.config['PORT'])
