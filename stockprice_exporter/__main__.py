from stockprice_exporter.cli.main import app

if __name__ == "__main__":
    app(prog_name="stockprice-exporter")
