# storefeed

storefeed collects product catalogues from the Turkish H&M store and turns
them into one common product model. It can then translate products, host
their pictures and report through Telegram.

## What it does

- **Product model** (`storefeed.models`): `Product`, `ColorItem`, `Size`,
  `Cat`, `Description` and `Variety`, plus helpers such as `slug_to_name`,
  `name_to_slug`, `transliterate`, `keep_letters_and_spaces`,
  `remove_duplicates` and the readable dumps `format_product` and
  `format_items`.
- **Grouping** (`storefeed.sorting`): `sort_products` moves complete runs of
  same-named products into a `Variety`; `last_index`,
  `concatenate_products`, `merge_products` and `find_first_by_name` are the
  pieces it is built from.
- **H&M** (`storefeed.hm_service`, `hm_lines`, `hm_card`,
  `hm_availability`, `hm_sizes`):
  - category discovery with `categories`, `pull_out_categories`,
    `is_wanted_category`, `translate_category` and `gender_for_site`;
  - product listings with `lines`, `lines_count`, `lines_all`,
    `line_to_products`, `parse_price` and sub-category links with
    `line_urls`;
  - pictures, sizes, prices and descriptions with `variable_product`,
    `variable_price` and `variable_description`;
  - stock with `availability`, `availability_map` and
    `availability_product`;
  - size names from 13-digit SKUs with `size_from_sku`,
    `size_from_sku_numeric` and `size_from_sku_shoe`, and the embedded
    product schema with `parse_product_schema` and `fetch_actual`.

  Requests go through `HMClient`, which needs at least one proxy URL and
  uses the configured proxies in turn.
- **Image hosting** (`storefeed.imgbb`): `ImgbbClient.upload` sends a
  base64 picture and returns an `ImgbbResponse`; `picture_to_base64` and
  `download_file` prepare files.
- **Translation** (`storefeed.translate`): `Translator.from_oauth` obtains
  an IAM token with `request_iam_token`; `translate`,
  `translate_to_english` and `translate_product` translate texts and
  products. Failures raise `TranslateError`.
- **Telegram** (`storefeed.notify`, `storefeed.telegram`): `Notifier`
  sends messages titled with a service name (and announces
  "Start service" when created). `TelegramService` sends messages and photo
  albums of up to nine pictures, posts editable messages through
  `new_update_message`, and answers inline keyboard presses through
  `new_checker` and `Checker.run`; `build_keyboard` builds such a keyboard
  from a mapping of tags to links.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from storefeed.hm_service import HMClient, pull_out_categories
from storefeed.hm_lines import lines_all, line_to_products
from storefeed.hm_card import variable_product
from storefeed.hm_availability import availability_product

client = HMClient(proxies=["http://localhost:8080"])

cats = pull_out_categories(
    "https://www2.hm.com/tr_tr/kadin/urune-gore-satin-al/elbise.html"
)
line = lines_all(client, "/tr_tr/kadin/urune-gore-satin-al/elbise.html")
products = line_to_products(line, cats, "woman")

product = variable_product(client, products[0])
product = availability_product(client, product)
```

Sizes can be read directly from a 13-digit H&M SKU:

```python
from storefeed.hm_sizes import size_from_sku

size_from_sku("1163274001002")  # "XS"
```

## What it does not do

- H&M is the only shop the package scrapes; there are no scrapers for
  other stores.
- There is no command-line program: everything is used from Python code.
- Nothing is stored: results are returned as objects, and saving them is
  left to the caller.

## Network access

Every scraper talks to the live site it is written for. Site layouts
change, so a selector that matched yesterday may find nothing today; the
functions then return empty results rather than guessing.