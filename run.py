from pix import create_api
import os


def main():
    app = create_api()
    porta = int(os.getenv('PIX_PORTA', '5005'))

    app.run(debug=True, port=porta, use_reloader=False)


if __name__ == '__main__':
    main()
