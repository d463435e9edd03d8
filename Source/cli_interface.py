"""
CLI Interface module for FairShare
Command-line interface for splitting a shared bill
"""

from bill_session import BillSession
from constants import MODE_ITEMIZED, PLATFORM_THEMES
from qr_upload import QRUploadError, load_qr_image
from receipt_export import ReceiptExportError, export_receipt
from utils import format_currency, try_parse_float, try_parse_int, validate_menu_choice


class FairShareCLI:
    """Command-line interface for FairShare"""

    def __init__(self, session: BillSession):
        self.session = session

    @property
    def itemized(self) -> bool:
        return self.session.mode == MODE_ITEMIZED

    def display_banner(self):
        """Display application banner"""
        print("\n" + "="*60)
        print("💸 FAIRSHARE - Bill Splitter")
        print("Itemized discount & fee split" if self.itemized else "Proportional discount split")
        print("="*60)

    def _ask_amount(self, prompt: str):
        """Read an amount, empty input counts as zero"""
        raw = input(prompt).strip()
        if not raw:
            return 0.0
        value = try_parse_float(raw)
        if value is None:
            print("⚠ Not a number, using 0")
            return 0.0
        return value

    def _pick_person(self):
        """Let the user choose a participant, returns it or None"""
        people = self.session.bill.people
        if not people:
            print("\n⚠ No people added yet")
            return None

        for i, person in enumerate(people, 1):
            print(f"{i}. {person.name}")
        idx = try_parse_int(input("Select person number: "))
        if idx is None or not 1 <= idx <= len(people):
            print("Invalid selection")
            return None
        return people[idx - 1]

    def display_results(self):
        """Display the current split"""
        allocation = self.session.allocation()

        print("\n" + "="*60)
        print("📊 RESULTS")
        print("="*60)

        if allocation.is_empty:
            print("\n⚠ Nobody on the bill yet")
            return

        if self.itemized:
            print(f"{'NAME':16} {'FOOD':>10} {'DISCOUNT':>10} {'FEES':>9} {'TO PAY':>10}  PAID")
            for s in allocation.shares:
                print(f"{s.name[:16]:16} {format_currency(s.food):>10} {format_currency(s.discount_share):>10} "
                      f"{format_currency(s.fee_share):>9} {format_currency(s.net):>10}  {'✓' if s.paid else '-'}")
        else:
            print(f"{'NAME':20} {'PURCHASE':>12} {'TO PAY':>12}  PAID")
            for s in allocation.shares:
                print(f"{s.name[:20]:20} {format_currency(s.food):>12} {format_currency(s.net):>12}  {'✓' if s.paid else '-'}")

        totals = allocation.totals
        print("-"*60)
        if self.itemized:
            config = self.session.bill.bill_config
            print(f"{'Total food:':30} {format_currency(totals.total_food)}")
            print(f"{'Discount on food:':30} {format_currency(totals.effective_food_discount)}")
            print(f"{'Delivery + service:':30} {format_currency(config.total_fees)}")
            if totals.effective_fee_discount:
                print(f"{'Discount on fees:':30} {format_currency(totals.effective_fee_discount)}")
            print(f"{'Fees per person:':30} {format_currency(totals.fee_per_person)}")
        else:
            print(f"{'Total discount:':30} {format_currency(totals.effective_food_discount)}")
            print(f"{'Total purchase:':30} {format_currency(totals.total_food)}")
        print(f"{'Total to pay:':30} {format_currency(totals.grand_total)}")
        print(f"{'Collected:':30} {format_currency(allocation.collected)}")
        print(f"{'Outstanding:':30} {format_currency(allocation.outstanding)}")

    def manage_people(self):
        """Manage participants of an itemized bill"""
        while True:
            names = ', '.join(p.name for p in self.session.bill.people)
            print(f"\nCurrent people: {names or 'None'}")
            print("\n1. Add person")
            print("2. Rename person")
            print("3. Remove person")
            print("4. Done")

            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3', '4']) or ''
            print("-"*50)

            if choice == '1':
                name = input("Enter name: ").strip()
                if name:
                    self.session.add_participant(name)
                    print(f"✓ Added {name}")
            elif choice == '2':
                person = self._pick_person()
                if person:
                    name = input("New name: ").strip()
                    if name:
                        self.session.rename_participant(person.id, name)
                        print(f"✓ Renamed to {name}")
            elif choice == '3':
                person = self._pick_person()
                if person:
                    self.session.remove_participant(person.id)
                    print(f"✓ Removed {person.name}")
            elif choice == '4':
                break

    def manage_items(self):
        """Add or remove line items for one participant"""
        person = self._pick_person()
        if not person:
            return

        while True:
            print(f"\n🧾 {person.name} - {format_currency(person.person_food)}")
            for i, item in enumerate(person.items, 1):
                print(f"  {i:2}. {item.name[:30]:30} {format_currency(item.price):>10}")
            print("\n1. Add item")
            print("2. Change item price")
            print("3. Remove item")
            print("4. Done")

            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3', '4']) or ''

            if choice == '1':
                name = input("Item name: ").strip()
                price = self._ask_amount("Price: ")
                self.session.add_item(person.id, name, price)
                print(f"✓ Added {name or 'item'} {format_currency(price)}")
            elif choice in ('2', '3'):
                idx = try_parse_int(input("Item number: "))
                if idx is None or not 1 <= idx <= len(person.items):
                    print("Invalid selection")
                    continue
                item = person.items[idx - 1]
                if choice == '2':
                    self.session.update_item(person.id, item.id, price=self._ask_amount("New price: "))
                    print("✓ Price updated")
                else:
                    self.session.remove_item(person.id, item.id)
                    print(f"✓ Removed {item.name}")
            elif choice == '4':
                break

    def edit_bill_settings(self):
        """Edit delivery, service, discount and platform"""
        config = self.session.bill.bill_config
        print(f"\nCurrent: delivery {format_currency(config.delivery)}, "
              f"service {format_currency(config.service)}, discount {format_currency(config.discount)}")
        delivery = self._ask_amount("Delivery fee: ")
        service = self._ask_amount("Service fee: ")
        discount = self._ask_amount("Total discount: ")
        self.session.set_bill_config(delivery, service, discount)

        platforms = list(PLATFORM_THEMES)
        print(f"\nPlatforms: {', '.join(platforms)}")
        platform = input(f"Platform [{self.session.bill.platform}]: ").strip().lower()
        if platform:
            if platform in platforms:
                self.session.set_platform(platform)
            else:
                print("⚠ Unknown platform, keeping the current one")
        print("✓ Bill settings saved")

    def edit_totals(self):
        """Edit the before/after totals of a flat bill"""
        total_before = self._ask_amount("Total before discount: ")
        total_after = self._ask_amount("Total after discount: ")
        self.session.set_totals(total_before, total_after)
        print(f"✓ Discount: {format_currency(self.session.bill.total_discount)}")

    def manage_amounts(self):
        """Add to, subtract from or remove people on a flat bill"""
        names = self.session.participant_names()
        if names:
            print(f"\nPeople: {', '.join(names)}")
        name = input("Name: ").strip()
        if not name:
            return

        print("\n1. Add/subtract amount")
        print("2. Set amount")
        print("3. Remove person")
        choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3']) or ''

        if choice == '1':
            person = self.session.adjust_amount(name, self._ask_amount("+/- amount: "))
            if person:
                print(f"✓ {person.name}: {format_currency(person.amount)}")
        elif choice == '2':
            if self.session.bill.find_person(name) is None:
                print(f"⚠ {name} is not on the bill")
                return
            self.session.set_amount(name, self._ask_amount("Amount: "))
            print("✓ Amount updated")
        elif choice == '3':
            removed = self.session.remove_person(name)
            print(f"✓ Removed {name}" if removed else f"⚠ {name} is not on the bill")

    def toggle_paid(self):
        """Mark someone as paid or unpaid"""
        person = self._pick_person()
        if not person:
            return
        key = person.id if self.itemized else person.name
        paid = self.session.toggle_paid(key)
        print(f"✓ {person.name} marked as {'paid' if paid else 'unpaid'}")

    def attach_qr_code(self):
        """Attach or remove the payment QR image"""
        if self.session.bill.qr_code:
            if input("Remove current QR code? (y/N): ").strip().lower() == 'y':
                self.session.clear_qr_code()
                print("✓ QR code removed")
            return

        image_path = input("Enter QR image path: ").strip()
        try:
            self.session.set_qr_code(load_qr_image(image_path))
            print("✓ QR code attached")
        except QRUploadError as e:
            print(f"⚠ {e}")

    def export_image(self):
        """Export the receipt image"""
        allocation = self.session.allocation()
        try:
            path = export_receipt(self.session.bill, allocation, self.session.mode)
            print(f"\n✅ Receipt saved to {path}")
        except ReceiptExportError as e:
            print(f"\n❌ Export failed: {e}")

    def reset(self):
        """Clear everything after confirmation"""
        if input("Clear all data? (y/N): ").strip().lower() == 'y':
            self.session.reset()
            print("✓ Bill cleared")

    def _menu(self):
        if self.itemized:
            return [
                ("Manage people", self.manage_people),
                ("Manage items", self.manage_items),
                ("Bill settings (fees, discount, platform)", self.edit_bill_settings),
                ("Toggle paid", self.toggle_paid),
                ("Show results", self.display_results),
                ("Payment QR code", self.attach_qr_code),
                ("Export receipt image", self.export_image),
                ("Reset bill", self.reset),
            ]
        return [
            ("Totals before/after discount", self.edit_totals),
            ("Add or update person", self.manage_amounts),
            ("Toggle paid", self.toggle_paid),
            ("Show results", self.display_results),
            ("Export receipt image", self.export_image),
            ("Reset bill", self.reset),
        ]

    def run(self):
        """Run the CLI application"""
        self.display_banner()
        entries = self._menu()
        exit_choice = str(len(entries) + 1)

        while True:
            print("\n" + "="*50)
            print("MAIN MENU")
            print("="*50)
            for i, (label, _) in enumerate(entries, 1):
                print(f"{i}. {label}")
            print(f"{exit_choice}. Exit")

            choice = input("\nChoice: ").strip()

            if choice == exit_choice:
                print("\n👋 Thank you for using FairShare!")
                break

            idx = try_parse_int(choice)
            if idx is not None and 1 <= idx <= len(entries):
                entries[idx - 1][1]()
