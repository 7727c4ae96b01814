import paramenc
from paramenc.config.system_settings import Settings

settings = Settings()
app = paramenc.create_app(settings)

if __name__ == '__main__':
    print('-'*50)
    print('paramenc')
    print(f'http://{settings.HOST}:{settings.PORT}')
    print('-'*50)
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG, use_reloader=settings.DEBUG)
