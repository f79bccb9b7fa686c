from gamematch import create_app

app = create_app()

# Gunicorn needs to see a callable named 'app'
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5054)
