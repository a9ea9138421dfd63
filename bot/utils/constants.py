"""
Bot Constants
Menu texts and callback data shared by keyboards and handlers
"""

from app.services.order_workflow import APPROVE_CALLBACK, DECLINE_CALLBACK

# Main menu buttons
MENU_BUY = "🛍️ Buy Vouchers"
MENU_ORDERS = "📦 My Orders"
MENU_RECOVER = "🔄 Recover Vouchers"
MENU_SUPPORT = "🆘 Support"
MENU_DISCLAIMER = "📜 Disclaimer"

CMD_START = "/start"
CMD_ADMIN = "/admin"
CMD_CANCEL = "/cancel"
CMD_MSG = "/msg"

# Verification callbacks
CB_CHECK_JOIN = "check_join"

# Purchase callbacks
CB_CATEGORY = "cat:"            # cat:<category_id>
CB_QUANTITY = "qty:"            # qty:<n>:<category_id>
CB_CUSTOM_QUANTITY = "qty:custom:"  # qty:custom:<category_id>
CB_BACK_TO_CATEGORIES = "back_to_categories"
CB_SUBMIT_PROOF = "submit_proof"

QUICK_QUANTITIES = (1, 2, 3, 5, 10, 20)

# Admin callbacks (all share the adm: prefix)
CB_ADMIN_PREFIX = "adm:"
CB_APPROVE = APPROVE_CALLBACK
CB_DECLINE = DECLINE_CALLBACK
CB_ADMIN_HUB = "adm:hub"
CB_ADMIN_ADD_CATEGORY = "adm:add_cat"
CB_ADMIN_DELETE_MENU = "adm:del_menu"
CB_ADMIN_DELETE_CATEGORY = "adm:del:"   # adm:del:<category_id>
CB_ADMIN_STOCK_MENU = "adm:stock_menu"
CB_ADMIN_STOCK = "adm:stock:"           # adm:stock:<category_id>
CB_ADMIN_PRICES_MENU = "adm:prices_menu"
CB_ADMIN_PRICES = "adm:prices:"         # adm:prices:<category_id>
CB_ADMIN_TIER = "adm:tier:"             # adm:tier:<tier>:<category_id>
CB_ADMIN_REMOVE_CODE = "adm:remove_code"
CB_ADMIN_BROADCAST = "adm:broadcast"
CB_ADMIN_DM = "adm:dm"
CB_ADMIN_BLOCK = "adm:block"
CB_ADMIN_STATS = "adm:stats"
CB_ADMIN_EXIT = "adm:exit"

DISCLAIMER_TEXT = (
    "📜 *Disclaimer*\n\n"
    "• Voucher codes are delivered only after the admin verifies your payment.\n"
    "• Delivered codes are non-refundable and cannot be exchanged.\n"
    "• Keep your Order ID safe; it is required to recover your codes.\n"
    "• Submitting fake payment proof gets your account blocked."
)
