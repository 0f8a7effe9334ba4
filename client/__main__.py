import argparse
import getpass
import logging
import sys

import requests

from .client import ApiError, PlatformClient, TokenStore, DEFAULT_BASE_URL, DEFAULT_TOKEN_FILE
from .dashboard import load_dashboard, enroll_in_course, render


def build_parser():
    parser = argparse.ArgumentParser(prog='python -m client', description="E-learning platform client")
    parser.add_argument('--url', default=DEFAULT_BASE_URL, help="API base URL")
    parser.add_argument('--token-file', default=DEFAULT_TOKEN_FILE)
    subparsers = parser.add_subparsers(dest='command')

    subparsers.add_parser('show', help="show profile and courses")

    register = subparsers.add_parser('register', help="create a learner account")
    register.add_argument('--name', required=True)
    register.add_argument('--email', required=True)
    register.add_argument('--password')
    register.add_argument('--phone')
    register.add_argument('--address')

    login = subparsers.add_parser('login', help="log in and keep the token")
    login.add_argument('--email', required=True)
    login.add_argument('--password')

    subparsers.add_parser('logout', help="forget the stored token")

    enroll = subparsers.add_parser('enroll', help="mark a course as completed")
    enroll.add_argument('course_id')
    return parser


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s - %(message)s')
    args = build_parser().parse_args(argv)
    client = PlatformClient(args.url, TokenStore(args.token_file))
    command = args.command or 'show'

    try:
        if command == 'register':
            password = args.password or getpass.getpass()
            body = client.register(args.name, args.email, password, phone=args.phone, address=args.address)
            print(body.get('message'))
        elif command == 'login':
            password = args.password or getpass.getpass()
            user = client.login(args.email, password)
            print(f"Logged in as {user['name']} ({user['role']})")
        elif command == 'logout':
            client.logout()
            print("Logged out")
        elif command == 'enroll':
            state = load_dashboard(client)
            if state.user is None:
                print("Please login first.")
                return 1
            if not enroll_in_course(client, state, args.course_id):
                return 1
            print(render(state))
        else:
            print(render(load_dashboard(client)))
    except ApiError as e:
        print(f"Error: {e.message} (HTTP {e.status_code})")
        return 1
    except requests.RequestException as e:
        print(f"Error: could not reach {args.url}: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
