import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Run the in-memory adminstore API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8085)
    args = parser.parse_args()
    uvicorn.run("mock_api.main:app", host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
