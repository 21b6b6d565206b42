from src.crawler.cli import app

# python -m src.crawler run --mode txt --input lib/urls.txt
if __name__ == "__main__":
    app()
